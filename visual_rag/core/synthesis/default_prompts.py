"""
Built-in analysis prompts.

Seeded into analysis_prompts and used when the table has no active prompt
for the requested analysis type.
"""

DEFAULT_SYSTEM_PROMPT = "You are an expert troubleshooting assistant for physical devices and equipment."

DEFAULT_PROMPTS: dict[str, dict[str, str]] = {
    "general": {
        "name": "General analysis",
        "description": "Overall inspection of indicators, condition and error messages",
        "prompt_text": (
            "Analyze this image of a product or device. Focus on identifying:\n"
            "1. Visual indicators (LED lights, displays, screens, gauges, warning symbols)\n"
            "2. Physical condition (damage, wear, misalignment, corrosion)\n"
            "3. Error messages, status displays, or diagnostic information\n"
            "4. Component positioning and connections\n"
            "5. Any abnormal visual signs or conditions\n\n"
            "Describe what you observe in detail, noting colors, patterns, text, "
            "and any indicators of malfunction."
        ),
    },
    "indicator": {
        "name": "Indicator analysis",
        "description": "Lights, displays, error codes and gauges",
        "prompt_text": (
            "Examine this image specifically for visual indicators such as:\n"
            "- LED lights (note exact colors, blinking patterns, solid/off states)\n"
            "- LCD/LED displays (error codes, messages, symbols, numbers)\n"
            "- Warning lights or status indicators\n"
            "- Gauge readings or meter positions\n"
            "- Icon displays or symbol indicators\n\n"
            "For each indicator found, describe the exact location, current state, "
            "and what it typically indicates."
        ),
    },
    "damage": {
        "name": "Damage assessment",
        "description": "Physical damage, wear and safety concerns",
        "prompt_text": (
            "Assess this image for physical damage, wear, or safety concerns:\n"
            "- Cracks, breaks, deformation, or structural damage\n"
            "- Discoloration, burn marks, or heat damage\n"
            "- Loose, missing, or misaligned components\n"
            "- Corrosion, rust, or chemical damage\n"
            "- Fluid leaks, stains, or contamination\n"
            "- Wear patterns or deterioration\n"
            "- Electrical damage or exposed wiring\n\n"
            "Rate the severity and describe potential safety implications."
        ),
    },
    "diagnostic": {
        "name": "Diagnostic analysis",
        "description": "Problem, likely cause, severity and next steps",
        "prompt_text": (
            "Analyze this image to provide diagnostic troubleshooting insights:\n"
            "1. Identify the specific problem or malfunction shown\n"
            "2. Determine the likely cause based on visual evidence\n"
            "3. Assess the urgency and severity of the issue\n"
            "4. Consider safety implications\n"
            "5. Suggest immediate actions if safety is a concern\n\n"
            "Structure your analysis with problem identification, severity assessment, "
            "likely cause, and recommended next steps."
        ),
    },
}

# Higher first in listings
DEFAULT_PROMPT_PRIORITIES = {"general": 10, "diagnostic": 8, "indicator": 6, "damage": 4}


def default_prompt_text(analysis_type: str | None) -> str:
    """Prompt text for an analysis type, general when unknown."""
    entry = DEFAULT_PROMPTS.get(analysis_type or "general", DEFAULT_PROMPTS["general"])
    return entry["prompt_text"]
