"""
NirmaanTech Portal - Seed data provider

Initial products, leads, orders, users and call scripts loaded into a
fresh Store at startup. Seed accounts use their id as password.
"""

import logging

from portal.config import ADMIN_PASSWORD, ADMIN_USER_ID, SYSTEM_ACTOR_ID, hash_password
from portal.models import (
    AttributionDetails,
    CentralScript,
    ClientDetails,
    ContactHistoryEntry,
    Lead,
    Order,
    OrderItem,
    Plan,
    PriceType,
    Product,
    Review,
    Role,
    SubScript,
    User,
)

logger = logging.getLogger("seed")


SCRIPTS = [
    CentralScript(
        id=1,
        category="General",
        main_script=(
            "Hi, my name is [CallerName] from NirmaanTech. We are India's first AI-based platform "
            "providing low-cost vendor products and services, including [CategoryList]. "
            "What category are you most interested in today?"
        ),
        sub_scripts=[
            SubScript(title="Initial Query", script="Start by confirming the customer's initial inquiry source and requirement."),
        ],
        assigned_roles=["T1", "P1", "F1"],
    ),
    CentralScript(
        id=2,
        category="Loans",
        main_script="I see you inquired about our Loan services. We specialize in Personal (up to 5L) and Business loans.",
        sub_scripts=[
            SubScript(title="Personal Loan Docs", script="To process a Personal loan, verify documents: PAN, Aadhar, 6 months bank statements."),
            SubScript(title="Business Loan Docs", script="For Business loans, request 1 year GST returns and business bank statements."),
            SubScript(title="Next Step", script="If satisfied, schedule a physical/virtual appointment for document collection."),
        ],
        assigned_roles=["P1", "T1"],
    ),
    CentralScript(
        id=3,
        category="Digital Marketing",
        main_script=(
            "You showed interest in Digital Marketing solutions (Website, SEO, SMM). "
            "Are you looking for brand launch or existing business boost?"
        ),
        sub_scripts=[
            SubScript(title="Website Inquiry", script="Ask about target pages (e.g., 4-page static vs. 10-page e-commerce)."),
            SubScript(title="Ad Campaign Pitch", script="Pitch the Meta Ads campaign setup included in the basic package."),
        ],
        assigned_roles=["T1", "F1"],
    ),
]


PRODUCTS = [
    Product(
        id=1, sku="WP-FT-001", price_type=PriceType.UNIT, unit_label="sqft",
        category="Interior Decor", city="Bangalore", name="Feathertouch Designer Wallpaper",
        mrp=1500, unit_rate_mrp=30, unit_rate_selling=26, unit_rate_franchise=19,
        selling_price=1300, franchise_price=950,
        short_description="Premium designer wallpaper (21 inches x 33 ft). Price calculated per square foot.",
        image="https://picsum.photos/400/250?random=1",
        gallery_images=["https://picsum.photos/800/600?random=11"],
        video_link="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        reviews=[Review(rating=5, comment="Excellent quality and easy to install. Highly recommend!", reviewer="Priya S.", date="2024-10-01")],
        vendor_id="V1",
    ),
    Product(
        id=2, sku="WP-PD-002", price_type=PriceType.UNIT, unit_label="sqft",
        category="Interior Decor", city="Bangalore", name="Pandora Designer Wallpaper",
        mrp=1500, unit_rate_mrp=35, unit_rate_selling=28, unit_rate_franchise=21,
        selling_price=1300, franchise_price=950,
        short_description="High-quality wallpaper. Price calculated per square foot.",
        image="https://picsum.photos/400/250?random=2",
        gallery_images=["https://picsum.photos/800/600?random=12"],
        video_link="https://www.youtube.com/watch?v=0kF6j9hO41Y",
        reviews=[Review(rating=4, comment="Good value, but delivery took a week.", reviewer="Rohan M.", date="2024-10-15")],
        vendor_id="V1",
    ),
    Product(
        id=3, sku="DM-BPA-003", price_type=PriceType.FIXED,
        category="Digital Marketing", city="All Karnataka", name="Basic Package WPA (Web + Ads)",
        mrp=10000, selling_price=6000, franchise_price=4500,
        short_description="4-page professional website, social media setup, 8 festival ad banners, 1 Meta Ads campaign setup.",
        image="https://picsum.photos/400/250?random=3",
        gallery_images=["https://picsum.photos/800/600?random=13"],
        video_link="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        reviews=[Review(rating=5, comment="Affordable start-up package. Met all expectations!", reviewer="Kavita A.", date="2025-11-05")],
    ),
    Product(
        id=4, sku="DM-PRO-004", price_type=PriceType.PERCENTAGE,
        category="Digital Marketing", city="All Karnataka", name="Pro Package WPA (Percentage)",
        mrp=24000, selling_price=15000, franchise_price=0,
        selling_price_threshold=12000, franchise_percent_above=0.65, franchise_percent_below=0.8,
        short_description="Professional digital marketing package with performance-based pricing.",
        image="https://picsum.photos/400/250?random=4",
        reviews=[Review(rating=3, comment="SEO results are slow, but telecalling support is great.", reviewer="Vijay C.", date="2025-09-10")],
    ),
    Product(
        id=5, sku="WP-PD-005", price_type=PriceType.FIXED,
        category="Interior Decor", city="Bangalore", name="Luxury Silk Finish Roll",
        mrp=5000, selling_price=3500, franchise_price=2500,
        short_description="Exclusive silk-finish roll. Easy maintenance.",
        image="https://picsum.photos/400/250?random=5",
        vendor_id="V1",
    ),
    Product(
        id=6, sku="BI-LP-006", price_type=PriceType.FIXED,
        category="Loans", city="Chennai", name="Loan Processing Fee (Business)",
        mrp=10000, selling_price=7500, franchise_price=5000,
        short_description="Fee for processing standard SME business loan applications.",
        image="https://picsum.photos/400/250?random=6",
    ),
    Product(
        id=7, sku="DM-ES-007", price_type=PriceType.FIXED,
        category="Digital Marketing", city="Pune", name="E-Commerce Setup Package",
        mrp=50000, selling_price=30000, franchise_price=20000,
        short_description="Full 10-page e-commerce store setup using Shopify/WooCommerce.",
        image="https://picsum.photos/400/250?random=7",
    ),
    Product(
        id=8, sku="WP-TC-008", price_type=PriceType.UNIT, unit_label="sqft",
        category="Interior Decor", city="Bangalore", name="Textured Concrete Wall Finish",
        mrp=4000, unit_rate_mrp=80, unit_rate_selling=65, unit_rate_franchise=40,
        selling_price=3250, franchise_price=2000,
        short_description="Modern industrial textured wall finish application.",
        image="https://picsum.photos/400/250?random=8",
        vendor_id="V1",
    ),
    Product(
        id=12, sku="BI-FL-012", price_type=PriceType.FIXED,
        category="Franchise", city="All Karnataka", name="NirmaanTech Store Franchise License",
        mrp=60000, selling_price=36000, franchise_price=27000,
        short_description=(
            "Single page E-commerce setup, product onboarding, full SMM, Paid Ads setup support. "
            "Franchise profit margin applies."
        ),
        image="https://picsum.photos/400/250?random=9",
        is_visible=False,
    ),
]


# (id, name, role, phone, city, plan, registration_date)
USERS = [
    ("T1", "Priya", Role.TELECALLER, "9876543210", None, None, None),
    ("T2", "Rohan", Role.TELECALLER, "9876543211", None, None, None),
    ("T3", "Supriya", Role.TELECALLER, "9876543212", None, None, None),
    ("F1", "Raju Traders", Role.FRANCHISE, "9900112233", "Bangalore", Plan.PAID, "2024-01-01"),
    ("F2", "Shakti Services", Role.FRANCHISE, "9900112234", "Mysore", Plan.BASIC, "2025-11-25"),
    ("F3", "Expired Demo", Role.FRANCHISE, "9900112235", "Hubli", Plan.BASIC, "2023-01-01"),
    ("P1", "Amit", Role.PARTNER, "8877665544", None, None, None),
    ("P2", "Divya", Role.PARTNER, "8877665545", None, None, None),
    ("V1", "Decor World", Role.VENDOR, "7766554433", "Bangalore", Plan.BASIC, "2024-01-01"),
    ("V2", "Tech Solutions", Role.VENDOR, "7766554434", "Pune", Plan.PAID, "2024-01-01"),
]


def _entry(status, comments, call_date, seconds, next_followup, logged_by):
    return ContactHistoryEntry(
        status=status,
        comments=comments,
        call_date=call_date,
        call_time_seconds=seconds,
        next_followup_date=next_followup,
        logged_by=logged_by,
    )


def _initial(call_date):
    return _entry("Pending", "Initial lead entry.", call_date, 0, None, SYSTEM_ACTOR_ID)


LEADS = [
    Lead(
        lead_id=101, telecaller_id="T1", assigned_franchise_id="F1",
        customer_name="Sumanth B.", customer_phone="9876543210",
        product_requirement="Loans", source="Facebook Ad", current_status="Follow-Up",
        contact_history=[
            _initial("2025-11-01"),
            _entry("Contacted", "Requested details on SME loans.", "2025-11-02", 95, "2025-11-05", "T1"),
            _entry("Interested", "Shared documents. Follow up for processing fee.", "2025-11-05", 150, "2025-11-07", "T1"),
            _entry("Follow-Up", "Pending document verification.", "2025-11-07", 70, "2025-11-10", "T1"),
        ],
    ),
    Lead(
        lead_id=102, telecaller_id="T2", assigned_franchise_id="F2",
        customer_name="Kavita R.", customer_phone="9988776655",
        product_requirement="Digital Marketing", source="Website Form", current_status="Appointment Scheduled",
        contact_history=[
            _initial("2025-11-01"),
            _entry("Contacted", "Needs e-commerce site. Booked demo.", "2025-11-03", 220, "2025-11-15", "T2"),
            _entry("Appointment Scheduled", "Demo confirmed for 15th.", "2025-11-08", 35, "2025-11-15", "T2"),
        ],
    ),
    Lead(
        lead_id=103, telecaller_id="T1", assigned_partner_id="P2",
        customer_name="Ganesh M.", customer_phone="8899001122",
        product_requirement="Interior Decor", source="Instagram", current_status="Not Interested",
        contact_history=[
            _initial("2025-11-04"),
            _entry("Not Interested", "Already hired a local vendor. Cold.", "2025-11-04", 50, None, "T1"),
        ],
    ),
    Lead(
        lead_id=104, telecaller_id="T2",
        customer_name="Priya S.", customer_phone="7766554433",
        product_requirement="Franchise", source="Referral", current_status="Pending",
        contact_history=[_initial("2025-11-10")],
    ),
    Lead(
        lead_id=105, telecaller_id="T1", assigned_franchise_id="F1",
        customer_name="Ravi V.", customer_phone="9000111222",
        product_requirement="Loans", source="Website Form", current_status="Appointment Conducted",
        contact_history=[
            _initial("2025-11-10"),
            _entry("Interested", "Sent to F1.", "2025-11-11", 60, "2025-11-12", "T1"),
            _entry("Appointment Conducted", "F1 Visit complete. Waiting for payment.", "2025-11-12", 120, "2025-11-15", "F1"),
        ],
    ),
    Lead(
        lead_id=106, telecaller_id="T1",
        customer_name="Deepa K.", customer_phone="8765432109",
        product_requirement="Digital Marketing", source="LinkedIn", current_status="Pending",
        contact_history=[_initial("2025-11-11")],
    ),
]


ORDERS = [
    Order(
        order_id=2025001, date="2025-11-15", status="Completed",
        items=[OrderItem(name="Basic Package WPA", price=6000, quantity=1, sku="DM-BPA-003")],
        subtotal=6000, tax=1080, total_amount=7080, payment_type="GST_INVOICE",
        client_details=ClientDetails(name="Pankaj V.", phone="9900011100", email="pankaj@example.com"),
        franchise_details=AttributionDetails(id="F1", name="Raju Traders", phone="9898989898", email="raju@nirmaan.com"),
        telecaller_details=AttributionDetails(id="T1", name="Priya", phone="7766554433", email="priya@nirmaan.com"),
        partner_details=AttributionDetails(id="P1", name="Amit"),
        admin_comments="Order received. Website draft initiated.",
    ),
    Order(
        order_id=2025002, date="2025-11-18", status="Completed",
        items=[OrderItem(name="Loan Processing Fee", price=7500, quantity=1, sku="BI-LP-006")],
        subtotal=7500, tax=1350, total_amount=8850, payment_type="GST_INVOICE",
        client_details=ClientDetails(name="Ravi V.", phone="9000111222", email="ravi@example.com"),
        franchise_details=AttributionDetails(id="F1", name="Raju Traders", phone="9898989898", email="raju@nirmaan.com"),
        telecaller_details=AttributionDetails(id="T1", name="Priya", phone="7766554433", email="priya@nirmaan.com"),
        partner_details=AttributionDetails(id="P2", name="Divya"),
        admin_comments="Loan documents verified and processed.",
    ),
]


def seed_store(store) -> None:
    """Load every seed collection into an empty store"""
    for product in PRODUCTS:
        store.products.add(product.model_copy(deep=True))
    for lead in LEADS:
        store.leads.add(lead)
    for order in ORDERS:
        store.orders.add(order)
    for script in SCRIPTS:
        store.scripts.add(script.model_copy(deep=True))

    store.admins.add(User(
        id=ADMIN_USER_ID,
        name="Administrator",
        role=Role.ADMIN,
        password_hash=hash_password(ADMIN_PASSWORD),
    ))
    for user_id, name, role, phone, city, plan, registration_date in USERS:
        store.user_repo(role).add(User(
            id=user_id,
            name=name,
            role=role,
            password_hash=hash_password(user_id),
            phone=phone,
            city=city,
            plan=plan,
            registration_date=registration_date,
        ))

    logger.info(
        f"[SEED] products={len(store.products)} leads={len(store.leads)} "
        f"orders={len(store.orders)} scripts={len(store.scripts)}"
    )
