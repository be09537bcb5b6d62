"""
Gemini boundary: thin async wrapper over the google-genai client.
"""

from visual_rag.boundary.genai.gemini_gateway import GeminiGateway, ChatTurnInput

__all__ = ["GeminiGateway", "ChatTurnInput"]
