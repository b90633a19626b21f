"""Prompts for consent form risk analysis."""

from __future__ import annotations

_PROMPT_DATA: dict[str, str] = {
    "ANALYSIS_PROMPT": """Analyze this medical consent form and provide:
1. A simplified summary in plain language (3-5 sentences)
2. Risk level (low/medium/high)
3. Key risk factors (list 3-5 main risks)

Consent Form:
{document}

Respond in JSON format only, with no other text:
{{
  "summary": "...",
  "riskLevel": "low|medium|high",
  "riskFactors": ["risk1", "risk2", ...]
}}""",
}
