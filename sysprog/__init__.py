"""Shell line parser and runner, coroutine file sorting and k-way merging."""

__version__ = "0.1.0"
__all__ = ["coro", "kmerge", "parser", "shell", "sortfiles", "sorting"]