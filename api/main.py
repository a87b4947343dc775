# ============================================================================
# api/main.py
# ============================================================================
"""
FastAPI Backend for Prescription Analysis

Runs on port 5000 by default (see ServerSettings).
Provides REST API for prescription text extraction, safety analysis and the
health assistant chatbot.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from prescription_analysis.api import create_app
from prescription_analysis.config import server_settings

app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=server_settings.HOST, port=server_settings.PORT)
