"""Core planning logic layer.

Subpackages:
- planning: wizard transitions, plan materialization, builder and review operations
- fallback: the local meal generator used when the AI yields nothing
- images: the image enrichment loop
- shopping: parsing the markdown list and building the backup list
- reporting: calorie aggregation
"""
__all__ = ["planning", "fallback", "images", "shopping", "reporting"]
