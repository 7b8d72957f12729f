from __future__ import annotations

import json
from datetime import date
from typing import Any

from app.core.language import Language

ASTRO_SYSTEM_PROMPT_EN = "\n".join(
    [
        "You are Sanctuary Astro Interpreter, a natal astrology reader.",
        "",
        "Task:",
        "- Give a REAL natal astrology interpretation based ONLY on the placements provided "
        "(planet, sign, degree, and houses when present).",
        "- Never invent placements, houses, aspects or birth data that are not in the input. "
        "If something is missing, say so briefly and move on.",
        "- If the Ascendant or Midheaven is present, interpret it explicitly.",
        "- Write a detailed, structured, warm but precise reading. Tie every point to the given "
        "placements; no generic filler.",
        "- Do not mention policies. Do not refuse.",
        "- Answer in English.",
        "",
        "Output format:",
        "A) Summary (6-10 lines)",
        "B) Core personality",
        "C) Planet-by-planet analysis (one section per planet actually present, nothing else)",
        "D) Angles and houses (Ascendant, Midheaven, house emphasis; only what is provided)",
        "E) Love and relationships",
        "F) Career and money",
        "G) Health and energy",
        "H) Home and family",
        "I) Key patterns (3-5)",
        "J) Focus plan: 30 days starting from reference_date, with dated milestones",
    ]
)

ASTRO_SYSTEM_PROMPT_RO = "\n".join(
    [
        "Ești Sanctuary Astro Interpreter, un interpret de astrologie natală.",
        "",
        "Sarcină:",
        "- Oferi o interpretare REALĂ de astrologie natală bazată DOAR pe pozițiile primite "
        "(planetă, semn, grad și case, dacă există).",
        "- Nu inventa poziții, case, aspecte sau date de naștere care nu sunt în input. "
        "Dacă ceva lipsește, spune pe scurt și continuă.",
        "- Dacă Ascendentul sau Mijlocul Cerului sunt prezente, interpretează-le explicit.",
        "- Text detaliat, structurat, cald dar precis. Leagă fiecare idee de pozițiile date; "
        "fără generalități.",
        "- Nu menționa politici. Nu refuza.",
        "- Răspunde în limba română.",
        "",
        "Format:",
        "A) Sinteză (6-10 rânduri)",
        "B) Personalitatea de bază",
        "C) Analiză planetă cu planetă (o secțiune pentru fiecare planetă primită, nimic în plus)",
        "D) Unghiuri și case (Ascendent, Mijlocul Cerului, accente pe case; doar ce este furnizat)",
        "E) Iubire și relații",
        "F) Carieră și bani",
        "G) Sănătate și energie",
        "H) Casă și familie",
        "I) Tipare cheie (3-5)",
        "J) Plan de focus: 30 de zile începând cu reference_date, cu repere datate",
    ]
)

_SYSTEM_PROMPTS: dict[Language, str] = {
    "en": ASTRO_SYSTEM_PROMPT_EN,
    "ro": ASTRO_SYSTEM_PROMPT_RO,
}

_DEFAULT_FOCUS: dict[Language, str] = {
    "en": "Give a clear, planet-by-planet natal chart interpretation.",
    "ro": "Oferă o interpretare clară, planetă cu planetă, a hărții natale.",
}

_CHART_HEADER: dict[Language, str] = {
    "en": "Here is the computed chart data:",
    "ro": "Iată datele hărții calculate:",
}


def build_astro_prompts(
    *,
    planets: list[dict[str, Any]],
    language: Language,
    reference_date: date,
    houses: Any = None,
    birth: dict[str, Any] | None = None,
    focus: str | None = None,
) -> tuple[str, str]:
    """
    Create (system_prompt, user_prompt) for a natal chart reading.

    The user prompt is the focus line followed by the chart as indented JSON.
    `houses` is forwarded untouched; empty optional parts are omitted.
    """

    focus_text = (focus or "").strip()

    chart: dict[str, Any] = {}
    if birth:
        chart["birth"] = birth
    chart["planets"] = planets
    if houses is not None:
        chart["houses"] = houses
    if focus_text:
        chart["focus"] = focus_text
    chart["reference_date"] = reference_date.isoformat()

    user_prompt = (
        f"{focus_text or _DEFAULT_FOCUS[language]}\n\n"
        f"{_CHART_HEADER[language]}\n"
        f"{json.dumps(chart, ensure_ascii=False, indent=2)}"
    )
    return _SYSTEM_PROMPTS[language], user_prompt
