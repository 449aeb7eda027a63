import sys
import os
import io
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import ClientAccount
from report import HEADER, account_rows, format_decimal, write_report


class TestFormatDecimal:
    def test_pads_to_four_places(self):
        assert format_decimal(Decimal("1.5")) == "1.5000"
        assert format_decimal(Decimal("0")) == "0.0000"
        assert format_decimal(Decimal("100")) == "100.0000"

    def test_negative_available(self):
        assert format_decimal(Decimal("-30")) == "-30.0000"

    def test_keeps_four_places_exactly(self):
        assert format_decimal(Decimal("1.2345")) == "1.2345"


class TestReport:
    def test_account_rows(self):
        account = ClientAccount(client_id=2, available=Decimal("1"), held=Decimal("2"))
        assert list(account_rows([account])) == [(2, Decimal("1"), Decimal("2"), Decimal("3"), False)]

    def test_write_report(self):
        locked = ClientAccount(client_id=2)
        locked.locked = True
        accounts = [
            ClientAccount(client_id=1, available=Decimal("1.5")),
            locked,
        ]

        out = io.StringIO()
        write_report(accounts, out)

        assert out.getvalue().splitlines() == [
            ",".join(HEADER),
            "1,1.5000,0.0000,1.5000,false",
            "2,0.0000,0.0000,0.0000,true",
        ]

    def test_header_only_when_no_accounts(self):
        out = io.StringIO()
        write_report([], out)
        assert out.getvalue() == "client,available,held,total,locked\n"
