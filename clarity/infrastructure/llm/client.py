"""Anthropic client helpers."""

import logging

from anthropic import AsyncAnthropic

from clarity.config.settings import Settings
from clarity.utils.retry import run_with_retry

logger = logging.getLogger(__name__)


def create_anthropic_client(settings: Settings) -> AsyncAnthropic:
    """Create an async Anthropic client from settings.

    SDK-level retries are disabled; ``run_with_retry`` owns the retry policy.
    """
    return AsyncAnthropic(
        api_key=settings.anthropic_api_key,
        timeout=settings.narrative_timeout,
        max_retries=0,
    )


async def run_completion(
    client: AsyncAnthropic,
    *,
    model: str,
    system_prompt: str,
    user_prompt: str,
    max_tokens: int,
    temperature: float,
    max_retries: int = 2,
) -> str:
    """Run a single-turn completion and return the concatenated text blocks."""

    async def _execute() -> str:
        response = await client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        logger.debug("Completion from %s: %d chars", model, len(text))
        return text

    return await run_with_retry(
        _execute,
        max_retries=max_retries,
        initial_delay=2.0,
        backoff_factor=2.0,
        retry_on_rate_limit=True,
        operation=f"{model} completion",
    )
