"""
Puppy care engine.

Pure computation core of a puppy care tracker: sleep state, potty
prediction, combined status, activity timelines, potty statistics, walk
scheduling, coverage gap filtering, and weight tracking.
"""

__version__ = "1.0.0"
