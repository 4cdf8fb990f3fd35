"""embed-sync command line interface."""
