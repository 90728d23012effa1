"""Client for the CAIXA public lottery results API.

Endpoint: ``{base_url}/{megasena|lotofacil}/{contest}`` returning JSON such as::

    {"numero": 2700, "dataApuracao": "09/04/2024",
     "dezenasSorteadasOrdemSorteio": ["07", "60", "13", "25", "40", "03"],
     "listaRateioPremio": [{"descricaoFaixa": "Sena", "numeroDeGanhadores": 0,
                            "valorPremio": 0.0}, ...],
     "acumulado": true, "numeroConcursoProximo": 2701,
     "dataProximoConcurso": "11/04/2024"}
"""

import asyncio
from datetime import date, datetime

import aiohttp
from loguru import logger

from lottery_optimizer.exceptions import DrawFetchError, DrawNotAvailableError
from lottery_optimizer.lottery.rules import LotteryType, parse_lottery_type
from lottery_optimizer.schemas.lottery import DrawResult, PrizeTier
from lottery_optimizer.scraper.base import DrawSource

DATE_FORMATS = ("%d/%m/%Y", "%d/%m/%y", "%d-%m-%Y", "%Y-%m-%d")

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "pt-BR,pt;q=0.9,en;q=0.8",
    "Referer": "https://loterias.caixa.gov.br/",
    "Origin": "https://loterias.caixa.gov.br",
}


def parse_br_date(value) -> date | None:
    """Parse DD/MM/YYYY (and a few variants). Empty values give None."""
    if not value:
        return None
    text = str(value).strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {value!r}")


def _parse_numbers(raw) -> list[int]:
    # The API sends zero-padded strings ("07"), older payloads send ints
    return [int(str(n).strip()) for n in raw or []]


def parse_draw(payload: dict) -> DrawResult:
    """Parse a CAIXA API payload into a DrawResult.

    Raises:
        ValueError, TypeError, KeyError: on malformed payloads.
    """
    numbers = _parse_numbers(
        payload.get("dezenasSorteadasOrdemSorteio") or payload.get("listaDezenas")
    )

    tiers = [
        PrizeTier(
            description=str(item.get("descricaoFaixa", "")),
            winners=int(item.get("numeroDeGanhadores") or 0),
            prize=float(item.get("valorPremio") or 0.0),
        )
        for item in payload.get("listaRateioPremio") or []
    ]

    next_contest = payload.get("numeroConcursoProximo")
    return DrawResult(
        contest_number=int(payload["numero"]),
        draw_date=parse_br_date(payload.get("dataApuracao")),
        numbers=numbers,
        prize_tiers=tiers,
        accumulated=bool(payload.get("acumulado", False)),
        next_contest_number=int(next_contest) if next_contest else None,
        next_draw_date=parse_br_date(payload.get("dataProximoConcurso")),
    )


class CaixaClient(DrawSource):
    """Fetches single draws by contest number over aiohttp."""

    def __init__(self, base_url: str, timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def _get_json(self, url: str) -> dict | None:
        """GET a JSON document. Returns None on 404."""
        async with aiohttp.ClientSession(headers=HEADERS, timeout=self._timeout) as client:
            async with client.get(url) as resp:
                if resp.status == 404:
                    return None
                if resp.status != 200:
                    raise DrawFetchError(f"API returned status {resp.status} for {url}")
                return await resp.json(content_type=None)

    async def fetch_draw(self, lottery_type: LotteryType, contest_number: int) -> DrawResult:
        lottery_type = parse_lottery_type(lottery_type)
        url = f"{self.base_url}/{lottery_type.value}/{contest_number}"
        logger.debug("Fetching {} contest {}", lottery_type.value, contest_number)

        try:
            payload = await self._get_json(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DrawFetchError(f"Error fetching contest {contest_number}: {e!r}") from e
        except ValueError as e:
            raise DrawFetchError(f"Invalid JSON for contest {contest_number}: {e}") from e

        if not payload:
            raise DrawNotAvailableError(lottery_type.value, contest_number)
        if not isinstance(payload, dict):
            raise DrawFetchError(f"Unexpected payload for contest {contest_number}")

        try:
            draw = parse_draw(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise DrawFetchError(f"Malformed draw payload for contest {contest_number}: {e}") from e

        if not draw.numbers:
            raise DrawNotAvailableError(lottery_type.value, contest_number)
        if draw.contest_number != contest_number:
            # Answering with another contest means the requested one is not out yet
            logger.debug(
                "Asked for contest {} of {}, got {}",
                contest_number, lottery_type.value, draw.contest_number,
            )
            raise DrawNotAvailableError(lottery_type.value, contest_number)

        return draw
