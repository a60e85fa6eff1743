from nutriplan.utilities.config import DATA_DIR

# Centralized record file names (single source of truth)
RECORD_FILES = {
    "step": "step.json",
    "loading": "loading.json",
    "config": "config.json",
    "plan": "plan.json",
    "image_cache": "image_cache.json",
    "shopping_list": "shopping_list.json",
}

__all__ = ['DATA_DIR', 'RECORD_FILES']
