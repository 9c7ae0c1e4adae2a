"""repomedic: repository health inspector for .NET project trees."""

__version__ = "0.1.0"
