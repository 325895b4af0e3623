import pytest

from invoice_extract.config.config_loader import ConfigLoader
from invoice_extract.config.profile_registry import ProfileRegistry
from invoice_extract.extraction.engine import ExtractionEngine
from invoice_extract.models.profile import Profile

MEDIS_INVOICE = """MEDIS (PTY) LTD
P O BOX 1515
SANLAMHOF
7532

Tax Invoice
Document No: IN326587
Date: 17/02/25

F-00042-47B    Met & Bunion Protector Sleeve Size L    4.00    x 1    300.33    25.0    R135.1    R900.99
F-00042-46B    Met & Bunion Protector Sleeve Size S    2.00    x 1    248.83    25.0    R55.99    R373.25
F-00033-03     Pure Gel Digital Cap 2cm Diameter Size L    1.00    x 6    247.56    25.0    R27.85    R185.67
P-PB           Podo Box Size L                          10.00    Each   76.35    0       R114.5   R763.50

Courier Cost for the delivery of the Podoboxes    R4.50    R30.00

THANK YOU FOR CHOOSING MEDIS
Banking details: Nedbank,
Account number: 1186041056,
Branch code: 118602

Time: 09:30:00    17/02/25    Total nett price: R2223.41
                              Discount: 0.00%
                              Amount excl tax: R1933.31
                              Tax: R290.10
                              TOTAL: R2223.41"""

MEDIS_EACH_FIRST_INVOICE = """MEDIS (PTY) LTD
Tax Invoice
Document No: IN326588
Date: 18/02/25

P-PB           Podo Box Size L                          10.00    Each   76.35    0       R114.5   R763.50
F-00042-47B    Met & Bunion Protector Sleeve Size L    4.00    x 1    300.33    25.0    R135.1    R900.99

Time: 09:30:00    18/02/25    Total nett price: R1664.49
                              TOTAL: R1664.49"""

TRANSPHARM_INVOICE = """TRANSPHARM
123 Medical Street
Johannesburg

Invoice: TP-2025-001
Date: 15/02/25

Orthotics Kit Professional    2    R450.00    R900.00
Silicone Toe Separators      5    R35.00     R175.00
Anti-Fungal Cream 50ml       3    R89.50     R268.50

Subtotal: R1343.50
VAT: R201.53
Total: R1545.03"""

UNKNOWN_INVOICE = """TEMU ORDER
Order #: TM789456123
Date: 12/02/25

Foot Care Kit Bundle         1    $25.99     $25.99
Silicone Insoles Pair        2    $12.50     $25.00

Subtotal: $50.99
Total: $50.99"""


@pytest.fixture
def medis_text() -> str:
    return MEDIS_INVOICE


@pytest.fixture
def medis_each_first_text() -> str:
    return MEDIS_EACH_FIRST_INVOICE


@pytest.fixture
def transpharm_text() -> str:
    return TRANSPHARM_INVOICE


@pytest.fixture
def unknown_text() -> str:
    return UNKNOWN_INVOICE


@pytest.fixture(scope="session")
def config_loader() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture
def registry(config_loader) -> ProfileRegistry:
    return config_loader.load_registry()


@pytest.fixture
def medis_profile(registry) -> Profile:
    return registry.get("medis")


@pytest.fixture
def engine(registry, config_loader) -> ExtractionEngine:
    return ExtractionEngine(registry, config_loader.load_settings())


@pytest.fixture
def make_profile():
    """Build a synthetic profile from keyword overrides."""

    def _make(code: str, identifier: str, **overrides) -> Profile:
        data = {
            "code": code,
            "display_name": code.upper(),
            "identifier": identifier,
        }
        data.update(overrides)
        return Profile.model_validate(data)

    return _make
