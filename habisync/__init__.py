"""habisync - mirror GitHub pull requests into Habitica to-dos"""
__version__ = "0.1.0"
