"""pr-context - assemble pull request context for LLM consumption."""

__version__ = "0.1.0"
