"""
Webseiten-Check - Main Application

A FastAPI service that captures websites with Playwright and scores their
copy, design and accessibility with Claude AI (Anthropic). Also serves the
text check for LinkedIn, Instagram and landing page texts and the
server-rendered report pages with the email gate.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from webseiten_check.api.routes import router
from webseiten_check.config import get_settings
from webseiten_check.web.views import web_router

# Load environment variables
load_dotenv()

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Initialize FastAPI app
app = FastAPI(title="Webseiten-Check")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# JSON API and report pages
app.include_router(router)
app.include_router(web_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, timeout_keep_alive=60)
