"""
DocRouter node pack.

Workflow nodes for the DocRouter document-processing service: documents,
LLM results, tags, schemas, knowledge bases and account administration.
"""

__version__ = "1.0.0"
