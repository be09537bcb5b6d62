"""Prompt text for context extraction."""

CONTEXT_EXTRACTION_PROMPT = """Analyze this image of a device in detail and return ONLY a JSON object with these fields:

{
  "primaryCategory": "main category (electrical, mechanical, electronic, safety, maintenance, performance, connectivity, general, or a more specific category)",
  "secondaryCategories": ["other relevant categories"],
  "detectedIssues": ["problems visible in the image"],
  "visualIndicators": ["indicator lamps, displays, icons or error codes that are visible"],
  "urgencyLevel": "one of: low, medium, high, critical",
  "keywords": ["search keywords relevant to the problem"],
  "deviceType": "kind of device",
  "problemType": "kind of problem"
}

Pay close attention to:
- lamps or displays that are lit or blinking
- error icons and warning symbols
- the state and settings of the device
- signs of damage or abnormal conditions
"""


def build_extraction_prompt(hint: str | None = None) -> str:
    """Extraction instruction with the user's hint appended when given."""
    if hint and hint.strip():
        return f"{CONTEXT_EXTRACTION_PROMPT}\nAdditional information from the user: {hint.strip()}\n"
    return CONTEXT_EXTRACTION_PROMPT
