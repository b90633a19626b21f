"""Prompts for reading text out of images and medical reports."""

from __future__ import annotations

_PROMPT_DATA: dict[str, str] = {
    "IMAGE_TEXT_PROMPT": (
        "Extract all text from this medical consent form image. "
        "Provide the complete text content."
    ),
    "REPORT_DETAILS_PROMPT": """Extract patient information from this medical report and return ONLY a JSON object with these exact fields:
{{
  "patient_name": "full name",
  "age": "age as number",
  "gender": "Male/Female/Other",
  "disease": "primary diagnosis",
  "treatment_course": "recommended treatment",
  "notes": "any additional relevant information"
}}

Report text:
{report}

Return ONLY the JSON, no other text.""",
}
