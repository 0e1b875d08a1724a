"""woger - publish a release to several places in one go."""

__version__ = "0.1.0"
