"""Keep issues and project boards in sync with pull request activity."""
