"""
lin-help: a handy tool for collecting common shell commands.

Save a command with a short description once, then find it again:
- add: remember a command
- search: substring match on command or description
- list: everything saved so far
"""

__version__ = "0.2.0"
