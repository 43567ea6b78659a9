from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from orders.models import ServiceRequest


@pytest.mark.django_db
class TestProfitReportCommand:
    def test_prints_rows_and_totals(self, client_user, banner_design):
        request = ServiceRequest.objects.create(client=client_user, service=banner_design)
        out = StringIO()

        call_command("profit_report", stdout=out)

        output = out.getvalue()
        assert str(request) in output
        assert "Banner Design" in output
        assert "1 requests | retail 45.00 USD" in output
        assert "margin 100.0%" in output

    def test_no_rows(self):
        out = StringIO()
        call_command("profit_report", "--method", "bundle", stdout=out)
        assert "No requests match" in out.getvalue()

    def test_invalid_arguments(self):
        with pytest.raises(CommandError):
            call_command("profit_report", "--method", "hourly")
        with pytest.raises(CommandError):
            call_command("profit_report", "--date-from", "yesterday")
        with pytest.raises(CommandError):
            call_command("profit_report", "--date-from", "2024-03-02", "--date-to", "2024-03-01")
