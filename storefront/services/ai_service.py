import json
import logging
import google.generativeai as genai
from flask import current_app

logger = logging.getLogger(__name__)


DESCRIPTION_PROMPT = (
    "Write a 2-line technical marketing spec for {name} ({category}). "
    "No markdown. Focus on high-performance apparel."
)

ADVISOR_INSTRUCTION = """You are a technical product advisor for STATS CUSTOMS.
Catalogue Data:
{catalogue}

Identify the best match for the user. Be concise. One sentence max."""

REVIEW_PROMPT = (
    "Write a short, realistic 1-sentence review for a custom apparel brand "
    "based on these keywords: {keywords}. "
    'Return JSON: {{"author": "Name", "quote": "Review text"}}'
)


def is_configured():
    return bool(current_app.config["GEMINI_API_KEY"])


def configure():
    """Configure Gemini with API key."""
    genai.configure(api_key=current_app.config["GEMINI_API_KEY"])


def _model(system_instruction=None):
    configure()
    return genai.GenerativeModel(
        current_app.config["GEMINI_MODEL"],
        system_instruction=system_instruction,
    )


def generate_description(product_name, category):
    """Two-line marketing copy for the product form."""
    response = _model().generate_content(
        DESCRIPTION_PROMPT.format(name=product_name, category=category)
    )
    return response.text or "Quality technical apparel."


def catalogue_context(products):
    lines = []
    for p in products or []:
        price = f"${p['price']}" if p.get("price") else "N/A"
        lines.append(
            f"ID: {p.get('id')}, Name: {p.get('name')}, "
            f"Category: {p.get('category')}, Price: {price}"
        )
    return "\n".join(lines)


def advise(messages, products):
    """Answer a shopper chat using the catalogue as grounding.

    The first message is the assistant greeting and is not sent.
    """
    model = _model(ADVISOR_INSTRUCTION.format(catalogue=catalogue_context(products)))
    contents = [
        {
            "role": "user" if m.get("sender") == "user" else "model",
            "parts": [m.get("text", "")],
        }
        for m in (messages or [])[1:]
    ]
    response = model.generate_content(contents)
    return response.text or "Scanning catalogue..."


def generate_review(keywords):
    response = _model().generate_content(
        REVIEW_PROMPT.format(keywords=keywords),
        generation_config=genai.GenerationConfig(
            response_mime_type="application/json",
        ),
    )
    try:
        return json.loads(response.text or "{}")
    except json.JSONDecodeError:
        logger.warning("Gemini returned a non-JSON review: %r", response.text)
        raise RuntimeError("Gemini response was not valid JSON")
