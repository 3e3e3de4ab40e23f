"""Course tools for computer architecture and operating systems."""

__version__ = "0.1.0"
__all__ = ["armsim", "minishell", "strproc", "v6fs"]