"""Filter and regroup content.json documentation corpora into compact LLM context files."""

__version__ = "0.1.0"
