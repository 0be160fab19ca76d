#!/usr/bin/env python3
"""
Run the FastAPI backend server.

Usage:
    python run_api.py
"""

import uvicorn

from config.settings import API_HOST, API_PORT

if __name__ == "__main__":
    print("Starting Carry Lab API server...")
    print(f"API will be available at: http://localhost:{API_PORT}")
    print(f"Documentation at: http://localhost:{API_PORT}/docs")
    print("Press CTRL+C to stop\n")

    # With reload=True the app must be passed as an import string
    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=True
    )
