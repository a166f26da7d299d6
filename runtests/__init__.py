"""Docker compose based test runner for TYPO3 documentation projects."""

__version__ = "0.1.0"
