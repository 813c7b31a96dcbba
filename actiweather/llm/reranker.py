from __future__ import annotations

import asyncio
import json
import logging
import re

from groq import AsyncGroq

from .config import DEFAULT_LLM_CONFIG, LLMConfig
from .models import RerankCandidate, RerankRequest, RerankResponse

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a local activity recommendation expert. "
    "Given the current weather conditions, re-order the venues based on which "
    "would offer the BEST EXPERIENCE for the user right now.\n\n"
    "Instructions:\n"
    "1. Consider the weather conditions and how they affect each venue's appeal.\n"
    "2. Prioritize indoor venues during bad weather (rain, extreme cold or heat).\n"
    "3. Prioritize outdoor and scenic venues during pleasant weather.\n"
    "4. Respect whether each place is currently open or closed.\n"
    "5. Balance weather appropriateness with overall quality (ratings).\n\n"
    "Respond with ONLY a JSON array of venue IDs in your preferred order. "
    "No explanation, no markdown formatting, just the JSON array, e.g.\n"
    '["venue_id_1", "venue_id_2", "venue_id_3"]'
)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class RerankParseError(ValueError):
    pass


def _status_label(open_now: bool | None) -> str:
    if open_now is True:
        return "Open now"
    if open_now is False:
        return "Closed"
    return "Hours unknown"


def _price_label(price_tier: int | None) -> str:
    if price_tier is None:
        return "Price unknown"
    return "$" * price_tier if price_tier else "Free"


def _build_user_message(
    venues: list[RerankCandidate],
    weather_summary: str,
    user_context: str | None,
) -> str:
    lines = [f"## Current Weather\n{weather_summary}"]
    if user_context:
        lines.append(f"\n## User Context\n{user_context}")

    lines.append("\n## Venues to Rank")
    for index, venue in enumerate(venues, start=1):
        rating = f"{venue.rating:.1f}" if venue.rating is not None else "No rating"
        price = _price_label(venue.price_tier)
        types = ", ".join(venue.types) or "N/A"
        lines.append(
            f"{index}. {venue.name} (ID: {venue.id})\n"
            f"   - Address: {venue.address or 'N/A'}\n"
            f"   - Rating: {rating} ({venue.review_count} reviews)\n"
            f"   - Price: {price}\n"
            f"   - Types: {types}\n"
            f"   - Status: {_status_label(venue.open_now)}\n"
            f"   - Score: {venue.score:.2f}"
        )

    return "\n".join(lines)


def parse_ranking(text: str) -> list[str]:
    """Extract the JSON array of ids from a model reply."""
    cleaned = _FENCE_RE.sub("", text or "").strip()
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise RerankParseError(f"Invalid JSON: {exc.msg}") from exc

    if not isinstance(parsed, list):
        raise RerankParseError("Response is not an array")
    if not all(isinstance(item, str) for item in parsed):
        raise RerankParseError("Array contains non-string elements")
    return parsed


def complete_ordering(ranked_ids: list[str], original_ids: list[str]) -> list[str]:
    """
    Keep known ids in the model's order, drop foreign or repeated ones and
    append whatever the model left out in the original order.
    """
    known = set(original_ids)
    ordered: list[str] = []
    seen: set[str] = set()
    for rid in ranked_ids:
        if rid in known and rid not in seen:
            ordered.append(rid)
            seen.add(rid)
    ordered.extend(rid for rid in original_ids if rid not in seen)
    return ordered


def _fallback(original_ids: list[str], error: str) -> RerankResponse:
    return RerankResponse(venue_ids=list(original_ids), success=False, error=error)


async def _complete(client: AsyncGroq, user_message: str, config: LLMConfig) -> str:
    response = await client.chat.completions.create(
        model=config.model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_message},
        ],
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )
    return response.choices[0].message.content or ""


async def rerank_venues(
    request: RerankRequest,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    cancel_event: asyncio.Event | None = None,
) -> RerankResponse:
    """
    Ask the Groq LLM to reorder venues for the current weather.

    Always returns a permutation of the input ids. Any failure (missing key,
    timeout, cancellation, API error, bad output) returns the input order
    with ``success=False``.
    """
    original_ids = [v.id for v in request.venues]

    if not original_ids:
        return RerankResponse(venue_ids=[], success=True)

    if not config.enabled:
        logger.info("AI reranking disabled, keeping deterministic order")
        return _fallback(original_ids, "Reranking disabled")
    if not config.api_key:
        logger.warning("Groq API key not configured, skipping AI reranking")
        return _fallback(original_ids, "API key not configured")

    candidates = request.venues[: config.max_candidates]
    candidate_ids = [v.id for v in candidates]
    overflow_ids = original_ids[len(candidate_ids):]

    client: AsyncGroq | None = None
    call: asyncio.Task[str] | None = None
    waiter: asyncio.Task[bool] | None = None
    try:
        client = AsyncGroq(
            api_key=config.api_key,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )
        user_message = _build_user_message(candidates, request.weather_summary, request.user_context)

        call = asyncio.create_task(_complete(client, user_message, config))
        pending_on = {call}
        if cancel_event is not None:
            waiter = asyncio.create_task(cancel_event.wait())
            pending_on.add(waiter)

        done, _ = await asyncio.wait(
            pending_on, timeout=config.timeout, return_when=asyncio.FIRST_COMPLETED,
        )

        if call not in done:
            if cancel_event is not None and cancel_event.is_set():
                logger.warning("AI reranking cancelled by caller, keeping deterministic order")
                return _fallback(original_ids, "Reranking cancelled")
            logger.warning("AI reranking timed out after %.1fs, keeping deterministic order", config.timeout)
            return _fallback(original_ids, f"Timed out after {config.timeout:g}s")

        ranked = parse_ranking(call.result())
        return RerankResponse(
            venue_ids=complete_ordering(ranked, candidate_ids) + overflow_ids,
            success=True,
        )

    except RerankParseError as exc:
        logger.warning("Could not parse Groq reranking response: %s", exc)
        return _fallback(original_ids, str(exc))

    except Exception as exc:
        logger.warning("Groq reranking call failed, falling back to score order", exc_info=True)
        return _fallback(original_ids, str(exc) or type(exc).__name__)

    finally:
        for task in (call, waiter):
            if task is not None and not task.done():
                task.cancel()
        if client is not None:
            await client.close()
