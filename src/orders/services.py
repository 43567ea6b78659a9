"""Service functions for the orders app."""
import logging

from django.utils import timezone

from pricing import selectors
from pricing.discounts import coupon_applies
from pricing.services import quote_service_request

logger = logging.getLogger("servicehub")


def quote_request(service_request, coupon_code=None, on_date=None):
    """Price one ad-hoc request with its client's tier and a coupon.

    Parameters
    ----------
    service_request : orders.models.ServiceRequest
    coupon_code : str, optional
        Coupon to try on the request. When omitted the coupon already
        attached to the request (if any) is used.
    on_date : date, optional
        Day the coupon must be valid on; today by default.

    Returns
    -------
    pricing.services.ResolvedPrice

    Raises
    ------
    ValueError
        If *coupon_code* does not exist or may not be used on this request.
    """
    from catalog.models import DiscountCoupon
    from vendors.models import VendorProfile

    on_date = on_date or timezone.localdate()
    record = selectors.service_request_record(service_request)

    if coupon_code:
        coupon_obj = DiscountCoupon.objects.filter(code__iexact=coupon_code.strip()).first()
        if coupon_obj is None:
            raise ValueError(f"Unknown coupon code: {coupon_code}")
    else:
        coupon_obj = service_request.coupon

    coupon = selectors.coupon_record(coupon_obj)
    if coupon is not None and not coupon_applies(
        coupon, record.client_id, service_id=record.service_id, on_date=on_date,
    ):
        if coupon_code:
            raise ValueError(f"Coupon {coupon.code} cannot be used on this request.")
        logger.debug("Stored coupon %s no longer applies to %s", coupon.code, service_request)
        coupon = None

    assignee = selectors.principal(service_request.assignee)
    agreements = {}
    vendor_id = assignee.vendor_account_id if assignee else None
    if vendor_id:
        profile = VendorProfile.objects.filter(user_id=vendor_id).first()
        if profile is not None:
            agreements[vendor_id] = selectors.vendor_agreements(profile)

    return quote_service_request(
        record,
        selectors.service_definition(service_request.service),
        client_tier=service_request.client.tripod_discount_tier,
        coupon=coupon,
        assignee=assignee,
        vendor_agreements=agreements,
    )
