"""
DFDA Explorer Core Metadata
---------------------------
Project identity shared by the backend root endpoint, the health report and
the dashboards.
"""

__project__ = "DFDA Explorer"
__version__ = "1.0.0"

CORE_METADATA = {
    "project": __project__,
    "version": __version__,
    "description": (
        "Read-only explorer for Decentralized FDA variables, variable "
        "categories and aggregate correlations."
    ),
}


def get_metadata() -> dict:
    """Return current project metadata as a dict."""
    return dict(CORE_METADATA)
