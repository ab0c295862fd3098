from .pillow_image_processor import PillowImageProcessor

__all__ = ["PillowImageProcessor"]
