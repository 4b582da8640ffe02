"""rancherctx — switch the active Rancher project from the command line."""

__version__ = "0.1.0"
