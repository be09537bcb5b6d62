"""
Google Cloud speech boundary (Text-to-Speech and Speech-to-Text REST APIs).
"""

from visual_rag.boundary.speech.google_speech_client import GoogleSpeechClient, Transcription

__all__ = ["GoogleSpeechClient", "Transcription"]
