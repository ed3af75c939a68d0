from todoserver.services.resource_controller import ResourceController

__all__ = [
    "ResourceController",
]
