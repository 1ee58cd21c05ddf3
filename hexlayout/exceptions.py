class HexLayoutError(Exception):
    """Base for all hexlayout exceptions."""

    pass


# High-level families
class LayoutConfigError(HexLayoutError, ValueError):
    """Invalid layout configuration (bucket count, ring depth, radius)."""

    pass


class StorageError(HexLayoutError):
    """Position state persistence failures."""

    pass


class PlacementError(HexLayoutError):
    """Placement pass failures."""

    pass


# Placement subtypes
class BucketContractError(PlacementError):
    """Bucket id outside the configured range, raised only in strict mode."""

    pass
