from typing import Any

import pytest


@pytest.fixture
def campaigns_payload() -> list[Any]:
    return [
        {"name": "Malevelon Creek", "planetIndex": 100},
        {"name": "  HELLMIRE "},
        "Estanu",
    ]


@pytest.fixture
def war_status_payload() -> dict[str, Any]:
    return {
        "warId": 801,
        "planetStatus": [
            {"planet": "Malevelon Creek", "owner": 4, "health": 1000000, "players": 45000},
            {"planet": "Fenrir III", "owner": 1, "health": 1000000, "players": 2},
            {"planet": "Hellmire", "owner": 3, "health": 512345, "players": 1200},
            {"planet": "Estanu", "owner": 9, "health": 800, "players": 0},
        ],
    }


@pytest.fixture
def major_orders_payload() -> list[Any]:
    return [
        {
            "id32": 1,
            "progress": [125000, 7],
            "setting": {
                "overrideTitle": "MAJOR ORDER",
                "overrideBrief": "Liberate the Severin sector.",
                "tasks": [
                    {"type": 3, "values": [3, 1, 500000]},
                    {"type": 11, "values": [1, 1, 10]},
                ],
                "reward": {"type": 1, "amount": 45},
            },
        },
        {
            "id32": 2,
            "progress": [],
            "setting": {"overrideTitle": "SECOND ORDER", "tasks": []},
        },
    ]
