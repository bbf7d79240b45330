"""record-mixins: discriminant-keyed behavior for data records.

This package lets a record type declare, per value of one of its ENUM
attributes, which methods its instances expose. Methods are either resolved
lazily on every access (``add_method_by``) or copied eagerly onto instances
when they are created or loaded (``mixin``).
"""

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy imports for main package exports."""
    if name in ("add_method_by", "mixin", "describe_behaviors"):
        from record_mixins import dispatch

        return getattr(dispatch, name)
    if name in ("Record", "RecordStore", "define_model"):
        from record_mixins import host

        return getattr(host, name)
    if name == "TableValidator":
        from record_mixins.core.validation import TableValidator

        return TableValidator
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Record",
    "RecordStore",
    "TableValidator",
    "__version__",
    "add_method_by",
    "define_model",
    "describe_behaviors",
    "mixin",
]
