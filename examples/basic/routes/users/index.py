"""Users — the folder is served as ``people``."""

path = "people"
