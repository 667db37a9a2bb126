"""
Storyguard - identity scrubbing and publish-safety validation for
AI-generated customer narratives.
"""

__version__ = "0.1.0"
