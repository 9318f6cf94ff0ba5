"""
MindCheck Assessment API
========================
Entry point for running the adaptive assessment service.

The actual FastAPI application is defined in app/main.py and imported here.
"""

from app.main import app

# This enables uvicorn to run the application when specified as 'main:app'
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
