from __future__ import annotations

import pytest

OFFICIAL_HEADER = (
    "Report_Date_as_YYYY_MM_DD,CONTRACT_MARKET_NAME,"
    "NonComm_Positions_Long_All,NonComm_Positions_Short_All,"
    "Change_in_NonComm_Long_All,Change_in_NonComm_Short_All"
)


@pytest.fixture
def short_csv() -> str:
    return (
        "date,symbol,long,short\n"
        "2024-01-12,OIL,300,100\n"
        "2024-01-05,GOLD,100,40\n"
        "2024-01-05,OIL,250,120\n"
        "2024-01-12,GOLD,90,50\n"
    )


@pytest.fixture
def official_csv() -> str:
    return (
        OFFICIAL_HEADER + "\n"
        '2024-01-05,"GOLD - COMMODITY EXCHANGE INC.",100,40,7,-3\n'
        '2024-01-12,"GOLD - COMMODITY EXCHANGE INC.",90,50,-10,10\n'
        '2024-01-12,"EURO FX - CHICAGO MERCANTILE EXCHANGE",200,80,999,1\n'
    )
