# Images subpackage - Screenshot processing
from .processor import resize_screenshot_if_needed

__all__ = ["resize_screenshot_if_needed"]
