"""
Pydantic schema package.

Domain-specific schema modules live here:
- analysis.py
- auth.py
- jobs.py
"""
