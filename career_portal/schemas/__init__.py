"""
Schemas module - Request/Response schemas for API endpoints.

Stored documents are loose field bags; the models in schemas.py are the API
contract (what the client sends and receives).
"""
