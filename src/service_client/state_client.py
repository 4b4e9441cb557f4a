"""
Game-state service client - the two HTTP calls behind every round
"""

from typing import Iterable, Optional

import requests

from pad_system.pads import PadColor, colors_to_names

from .errors import SequenceMismatch, TransportError
from .snapshot import GameStateSnapshot


DEFAULT_SERVICE_URL = "http://localhost:3000/api/v1/game-state"


class GameStateClient:
    """
    Client for the external game-state service.

    The service owns the sequence, level and high score; this client only
    asks it to start over (PUT) or to judge the player's input (POST).

    Example:
        client = GameStateClient("http://localhost:3000/api/v1/game-state", logger=logger)
        snapshot = client.reset_game()
        try:
            snapshot = client.submit_sequence([PadColor.RED])
        except SequenceMismatch:
            ...
    """

    # Status the service uses for "that was the wrong sequence"
    MISMATCH_STATUS = 400

    def __init__(self,
                 base_url: str = DEFAULT_SERVICE_URL,
                 timeout_s: float = 5.0,
                 session: Optional[requests.Session] = None,
                 logger=None):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self.logger = logger

    def reset_game(self) -> GameStateSnapshot:
        """
        Start a new game on the service.

        Raises:
            TransportError: On any network/server/format failure
        """
        response = self._request("PUT", self.base_url)
        snapshot = self._parse(response)
        self._debug(f"Reset game: level={snapshot.level} length={len(snapshot.sequence)} "
                    f"high_score={snapshot.high_score}")
        return snapshot

    def submit_sequence(self, colors: Iterable[PadColor]) -> GameStateSnapshot:
        """
        Submit the player's input for the current round.

        Returns:
            The next round's state

        Raises:
            SequenceMismatch: If the service rejected the sequence
            TransportError: On any other failure
        """
        names = colors_to_names(colors)
        response = self._request("POST", f"{self.base_url}/sequence", json={"sequence": names})
        if response.status_code == self.MISMATCH_STATUS:
            self._debug(f"Sequence rejected: {names}")
            raise SequenceMismatch(f"Sequence rejected by service: {names}")
        snapshot = self._parse(response)
        self._debug(f"Sequence accepted: level={snapshot.level} high_score={snapshot.high_score}")
        return snapshot

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self.timeout_s, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

    def _parse(self, response: requests.Response) -> GameStateSnapshot:
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise TransportError(f"Game service error: {e}", status_code=response.status_code) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(f"Game service returned invalid JSON: {e}",
                                 status_code=response.status_code) from e

        return GameStateSnapshot.from_payload(payload)

    def _debug(self, message: str) -> None:
        if self.logger:
            self.logger.debug(message)

    def close(self) -> None:
        self.session.close()
