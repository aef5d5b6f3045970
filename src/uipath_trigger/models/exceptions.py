from typing import Optional

from httpx import HTTPStatusError


class EnrichedException(Exception):
    def __init__(self, error: HTTPStatusError) -> None:
        # Extract the relevant details from the HTTPStatusError
        self.status_code: Optional[int] = (
            error.response.status_code if error.response is not None else None
        )
        self.url = str(error.request.url) if error.request is not None else "Unknown"
        self.response_content = (
            error.response.content.decode("utf-8", errors="replace")
            if error.response is not None and error.response.content
            else "No content"
        )

        enriched_message = (
            f"\nRequest URL: {self.url}"
            f"\nStatus Code: {self.status_code if self.status_code is not None else 'Unknown'}"
            f"\nResponse Content: {self.response_content}"
        )

        # Initialize the parent Exception class with the formatted message
        super().__init__(enriched_message)
