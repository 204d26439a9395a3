"""Object storage backends for cached and stored files."""
