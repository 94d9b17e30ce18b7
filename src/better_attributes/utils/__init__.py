from better_attributes.utils.decorators import traced

__all__ = [
    "traced",
]
