"""FastAPI transport for the session service.

Run with uvicorn's factory mode:

    uvicorn sesame.presentation.api.app:create_app --factory
"""
