"""Claude API client used as the bot's text oracle."""

import anthropic

from logger import logger


class ClaudeClient:
    """Single-shot Claude completions (prompt in, text out)."""

    def __init__(self, api_key: str | None, model: str = "claude-sonnet-4-20250514"):
        self.client = anthropic.AsyncAnthropic(api_key=api_key) if api_key else None
        self.model = model

    @property
    def configured(self) -> bool:
        return self.client is not None

    async def complete(
        self,
        prompt: str,
        temperature: float | None = None,
        max_tokens: int = 512
    ) -> str:
        """
        Send one user prompt and return the text of the reply.

        Args:
            prompt: User message
            temperature: Sampling temperature (API default when None)
            max_tokens: Max tokens in the reply

        Returns:
            Concatenated text blocks of the response, stripped

        Raises:
            RuntimeError: If no API key is configured
            anthropic.APIError: On any API failure
        """
        if self.client is None:
            raise RuntimeError("Claude API key not configured")

        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = await self.client.messages.create(**kwargs)
        except anthropic.APIError as e:
            logger.error(f"Claude API error: {e}")
            raise

        text_blocks = [b.text for b in response.content if b.type == "text"]
        return "\n".join(text_blocks).strip()
