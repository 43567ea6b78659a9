"""Print the profit report as a plain-text table."""

from __future__ import annotations

from datetime import date

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from reports.services import AD_HOC, BUNDLE, ReportFilters, get_profit_report

COLUMNS = (
    ("Job", "job_number", 8),
    ("Method", "service_method", 7),
    ("Service", "service_name", 24),
    ("Client", "client_name", 16),
    ("Vendor", "vendor_name", 18),
    ("Status", "status", 14),
    ("Retail", "retail_price", 10),
    ("Cost", "vendor_cost", 10),
    ("Profit", "profit", 10),
)


def _parse_date(value, option):
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise CommandError(f"{option} must be a date in YYYY-MM-DD format, got {value!r}.")


class Command(BaseCommand):
    help = "Print per-request retail price, vendor cost and profit with totals."

    def add_arguments(self, parser):
        parser.add_argument("--vendor", default="", help="Only rows billed to this vendor id.")
        parser.add_argument(
            "--method",
            default="",
            help=f"Only '{AD_HOC}' or '{BUNDLE}' rows.",
        )
        parser.add_argument("--date-from", default="", help="First creation day (YYYY-MM-DD).")
        parser.add_argument("--date-to", default="", help="Last creation day (YYYY-MM-DD).")
        parser.add_argument(
            "--client",
            action="append",
            default=[],
            help="Only rows of this client id. Repeat for several clients.",
        )
        parser.add_argument("--search", default="", help="Job number or request id fragment.")

    def handle(self, *args, **options):
        method = (options.get("method") or "").strip()
        if method and method not in (AD_HOC, BUNDLE):
            raise CommandError(f"--method must be '{AD_HOC}' or '{BUNDLE}', got {method!r}.")
        date_from = _parse_date(options.get("date_from"), "--date-from")
        date_to = _parse_date(options.get("date_to"), "--date-to")
        if date_from and date_to and date_from > date_to:
            raise CommandError("--date-from must not be after --date-to.")

        filters = ReportFilters(
            vendor_id=(options.get("vendor") or "").strip() or None,
            method=method or None,
            date_from=date_from,
            date_to=date_to,
            client_ids=frozenset(c.strip() for c in options.get("client") or [] if c.strip()),
            search=(options.get("search") or "").strip(),
        )
        report = get_profit_report(filters)

        if not report.rows:
            self.stdout.write("No requests match the given filters.")
            return

        self.stdout.write(self._line(title for title, _, _ in COLUMNS))
        self.stdout.write(self._line("-" * width for _, _, width in COLUMNS))
        for row in report.rows:
            self.stdout.write(self._line(str(getattr(row, attr)) for _, attr, _ in COLUMNS))

        totals = report.totals
        currency = getattr(settings, "SERVICEHUB_CURRENCY", "USD")
        self.stdout.write("")
        self.stdout.write(
            self.style.SUCCESS(
                f"{totals.count} requests | retail {totals.retail_price} {currency} | "
                f"cost {totals.vendor_cost} {currency} | profit {totals.profit} {currency} | "
                f"margin {totals.margin_percent}%"
            )
        )

    @staticmethod
    def _line(values):
        cells = []
        for value, (_, _, width) in zip(values, COLUMNS):
            text = value if len(value) <= width else value[: width - 1] + "~"
            cells.append(text.ljust(width))
        return "  ".join(cells).rstrip()
