"""npmview - presentation core for npm package pages.

Groups version history into release lines, renders READMEs to safe HTML and
synthesizes install/run commands across package managers.
"""

__version__ = "0.1.0"
