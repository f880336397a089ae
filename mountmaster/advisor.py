"""
Design advice from Google Gemini.

Sends a description of the photo plus the current mount settings to the
Gemini ``generateContent`` REST endpoint and turns the structured reply into
a partial config that can be laid over the current one with
``models.apply_suggestion``.
"""
import os
import json
import logging
from dataclasses import dataclass, field

import requests

from .constants import GEMINI_MODEL, GEMINI_ENDPOINT
from .models import BorderConfig
from .utils import UnitUtils

logger = logging.getLogger(__name__)

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "suggestion": {"type": "STRING"},
        "reasoning": {"type": "STRING"},
        "suggestedValues": {
            "type": "OBJECT",
            "properties": {
                "photoBorder": {"type": "NUMBER"},
                "mountOffset": {"type": "NUMBER"},
                "topBorder": {"type": "NUMBER"},
                "bottomBorder": {"type": "NUMBER"},
                "sideBorder": {"type": "NUMBER"},
            },
        },
    },
}


class AdvisorError(Exception):
    """Base class for anything that stops the advisor producing a suggestion."""

class MissingCredentialError(AdvisorError):
    pass

class MalformedResponseError(AdvisorError):
    pass


@dataclass
class Advice:
    suggestion: str
    reasoning: str
    suggested_config: dict = field(default_factory=dict)


def build_prompt(description, config, unit):
    w = UnitUtils.to_display(config.photo_width, unit)
    h = UnitUtils.to_display(config.photo_height, unit)
    return f"""
You are an expert art framer and gallery curator.
A user needs advice on mounting a photograph.

User's Description of Photo: "{description}"
Current Photo Size: {w} x {h} {unit}.
Current Mode: {config.mode}.

Suggest optimal mount dimensions, specifically:
1. A recommended photo border (inner white space).
2. Recommended mount margins (top, bottom, sides). Note: Often a "weighted bottom" (slightly larger bottom margin) looks best for visual balance.
3. A vertical offset if applicable.

Provide a concise reasoning and a suggestion summary.
Also provide the specific numeric values for the suggestion in the requested JSON format.
Values should be in {unit}.
"""


def parse_advice(text, unit):
    """Turns the model's JSON text into Advice with all lengths in mm."""
    try:
        result = json.loads(text or "{}")
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Response is not JSON: {e}") from e

    values = result.get("suggestedValues") if isinstance(result, dict) else None
    if not isinstance(values, dict):
        raise MalformedResponseError("Invalid response from AI")

    def mm(key):
        val = values.get(key)
        if val is None: return None
        try:
            return UnitUtils.from_display(float(val), unit)
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(f"{key} is not a number: {val!r}") from e

    side = mm("sideBorder")
    borders = {"top": mm("topBorder"), "bottom": mm("bottomBorder"), "left": side, "right": side}
    suggested = {
        "photo_border": mm("photoBorder"),
        "mount_offset": mm("mountOffset"),
        "manual_borders": borders,
    }
    if all(v is not None for v in borders.values()):
        suggested["manual_borders"] = BorderConfig(**borders)

    return Advice(suggestion=str(result.get("suggestion", "")),
                  reasoning=str(result.get("reasoning", "")),
                  suggested_config=suggested)


class MountAdvisor:
    def __init__(self, api_key=None, model=GEMINI_MODEL, timeout=60):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
        self.model = model
        self.timeout = timeout

    def get_mount_advice(self, description, config, unit):
        if not self.api_key:
            raise MissingCredentialError("API Key not found")

        body = {
            "contents": [{"parts": [{"text": build_prompt(description, config, unit)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }
        headers = {
            'x-goog-api-key': self.api_key,
            'Content-Type': 'application/json'
        }
        url = GEMINI_ENDPOINT.format(model=self.model)
        logger.debug("Requesting mount advice from %s", self.model)

        try:
            response = requests.post(url, headers=headers, json=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Error getting AI advice: %s", e)
            raise AdvisorError(str(e)) from e
        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response body is not JSON: {e}") from e

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error("Unexpected Gemini response shape: %s", data)
            raise MalformedResponseError("Response has no candidate text") from e

        advice = parse_advice(text, unit)
        logger.info("Received mount advice: %s", advice.suggestion)
        return advice


def get_mount_advice(description, config, unit, api_key=None):
    return MountAdvisor(api_key=api_key).get_mount_advice(description, config, unit)
