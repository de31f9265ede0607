"""Unit tests for InnVest web route modules.

Testing pattern:
    - Use FastAPI's TestClient for route testing
    - Override the database dependency and mock the analytics engine
    - Test query parameter validation and error mapping
"""
