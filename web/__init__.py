"""
Web application package for the Chess AI engine.

Provides a FastAPI-based REST API that returns the engine's move for a FEN.
Run with: uvicorn web.app:app
"""
