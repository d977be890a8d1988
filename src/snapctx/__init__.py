"""snapctx: snapshot a project directory into a single Markdown document for an LLM."""

__version__ = "0.1.0"
