"""
Version constants for the MIME exporter.

Component versions are bumped whenever the bytes a component produces change,
so rendered messages can be traced back to the writer that produced them.
"""

__version__ = "1.0.0"

# Component versions (update these when implementations change)
LINE_WRAPPER_VERSION = "line-wrap-1.0.0"
MULTIPART_WRITER_VERSION = "multipart-1.0.0"
EXPORTER_VERSION = "exporter-1.0.0"


def get_component_versions() -> dict:
    """
    Get current component version configuration.

    Returns:
        Mapping of component name to version string
    """
    return {
        "package": __version__,
        "line_wrapper": LINE_WRAPPER_VERSION,
        "multipart_writer": MULTIPART_WRITER_VERSION,
        "exporter": EXPORTER_VERSION,
    }
