"""Career-coach backend: job-posting fetch and AI response handling."""

__version__ = "0.1.0"
