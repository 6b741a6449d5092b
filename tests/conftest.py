import pytest

from x12lite.delimiters import DEFAULT_HEADER

BODY = "\n".join(
    [
        DEFAULT_HEADER,
        "GS*HB*SENDER*RECEIVER*20240626*0906*1*X*005010X279A1~",
        "ST*271*0001*005010X279A1~",
        "EB*1**30^33~",
        "EB**IND~",
        "EB*C*IND*47:A^48~",
        "REF*EJ*123~",
        "SE*6*0001~",
        "GE*1*1~",
        "IEA*1*000000001~",
    ]
)


@pytest.fixture
def body() -> str:
    return BODY
