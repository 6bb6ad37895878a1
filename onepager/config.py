"""Runtime settings and layout constants."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from reportlab.lib.pagesizes import A4


PAGE_WIDTH, PAGE_HEIGHT = A4

# Nominal page padding in points, before the auto-fit scale is applied.
PADDING_TOP = 26
PADDING_BOTTOM = 24
PADDING_H = 34

SCALE_TOLERANCE = 0.01
DEFAULT_DPI = 150

API_KEY_ENV = "ONEPAGER_OPENAI_API_KEY"
MODEL_ENV = "ONEPAGER_OPENAI_MODEL"
DEFAULT_MODEL = "gpt-4o-mini"


@dataclass
class Settings:
    api_key: str = ""
    model: str = DEFAULT_MODEL


def load_settings(dotenv: bool = True) -> Settings:
    """Read collaborator settings from the environment (and .env if present)."""
    if dotenv:
        load_dotenv()

    return Settings(
        api_key=(os.getenv(API_KEY_ENV) or "").strip(),
        model=(os.getenv(MODEL_ENV) or "").strip() or DEFAULT_MODEL,
    )
