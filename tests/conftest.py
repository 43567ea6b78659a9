from decimal import Decimal

import pytest

from accounts.models import User
from catalog.models import Bundle, BundleItem, BundleLineItem, DiscountCoupon, Service, ServicePricingTier
from vendors.models import VendorProfile


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@test.com",
        password="testpass123",
        username="admin",
        role=User.Role.ADMIN,
    )


@pytest.fixture
def client_user(db):
    return User.objects.create_user(
        email="client@test.com",
        password="testpass123",
        username="acme",
        role=User.Role.CLIENT,
        tripod_discount_tier=User.DiscountTier.OMS_SUBSCRIPTION,
    )


@pytest.fixture
def internal_designer(db):
    return User.objects.create_user(
        email="designer@test.com",
        password="testpass123",
        username="inhouse",
        role=User.Role.INTERNAL_DESIGNER,
    )


@pytest.fixture
def vendor_user(db):
    return User.objects.create_user(
        email="vendor@test.com",
        password="testpass123",
        username="pixelworks",
        role=User.Role.VENDOR,
    )


@pytest.fixture
def vendor_designer(vendor_user):
    return User.objects.create_user(
        email="vendor.designer@test.com",
        password="testpass123",
        username="pixel-dana",
        role=User.Role.VENDOR_DESIGNER,
        vendor=vendor_user,
    )


@pytest.fixture
def vendor_profile(vendor_user, logo_cleanup, creative_art):
    return VendorProfile.objects.create(
        user=vendor_user,
        company_name="Pixel Works",
        pricing_agreements={
            logo_cleanup.title: {"quantity": {"1-50": 1.2, "51-100": 1.0, ">100": 0.7}},
            creative_art.title: {"basePrice": 25, "complexity": {"Basic": 20, "Ultimate": 55}},
        },
    )


@pytest.fixture
def logo_cleanup(db):
    service = Service.objects.create(
        title="Logo Cleanup",
        pricing_structure=Service.PricingStructure.QUANTITY,
        base_price=Decimal("0.00"),
    )
    for order, (label, price) in enumerate([("1-50", "2.00"), ("51-100", "1.80"), ("101+", "1.30")]):
        ServicePricingTier.objects.create(service=service, label=label, price=Decimal(price), sort_order=order)
    return service


@pytest.fixture
def creative_art(db):
    service = Service.objects.create(
        title="Creative Art",
        pricing_structure=Service.PricingStructure.COMPLEXITY,
        base_price=Decimal("0.00"),
    )
    for order, (label, price) in enumerate([("Basic", "30.00"), ("Ultimate", "80.00")]):
        ServicePricingTier.objects.create(service=service, label=label, price=Decimal(price), sort_order=order)
    return service


@pytest.fixture
def banner_design(db):
    return Service.objects.create(
        title="Banner Design",
        pricing_structure=Service.PricingStructure.SINGLE,
        base_price=Decimal("45.00"),
    )


@pytest.fixture
def launch_bundle(banner_design):
    bundle = Bundle.objects.create(name="Launch Kit", discount_percent=Decimal("10.00"))
    line_item = BundleLineItem.objects.create(name="Color palette", price=Decimal("10.00"))
    BundleItem.objects.create(bundle=bundle, service=banner_design, quantity=2)
    BundleItem.objects.create(bundle=bundle, line_item=line_item, quantity=1)
    return bundle


@pytest.fixture
def ten_off_coupon(db):
    return DiscountCoupon.objects.create(
        code="TENOFF",
        discount_type=DiscountCoupon.DiscountType.AMOUNT,
        discount_value=Decimal("10.00"),
        max_uses=5,
    )
