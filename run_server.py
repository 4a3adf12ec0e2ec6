#!/usr/bin/env python3
"""
Start the transcript cleaner API with uvicorn.
"""

# Load environment variables before importing any app module
from dotenv import load_dotenv
import os
load_dotenv()

import uvicorn

if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    print(f"🚀 Transcript cleaner API on http://localhost:{port}")
    print("📝 Start the UI with: streamlit run demo.py")
    print("🔑 Make sure OPENAI_API_KEY is set in .env")

    uvicorn.run(
        "transcript_cleaner.main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("RELOAD", "false").lower() == "true",
        log_level="info",
    )
