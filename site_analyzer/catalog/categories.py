"""
Category Catalog: per-business-category traffic, income and lot-size thresholds.

The catalog is a static, id-indexed, read-only mapping built once at import
time. Every record is validated by ``CategoryRequirement`` (``min <= ideal``
for VPD and lot size, non-empty brand list), so a bad edit to this table
fails at import rather than at scoring time.

Categories differ only in data. The few behaviours that single out specific
ids live next to the code that uses them:
  - ``VALUE_CATEGORIES`` (below): skipped by the suitability ranker in
    upper-middle / high income areas.
  - District allow / deny lists: ``site_analyzer.analysis.district``.

Example brands are ordered; the recommendation generator takes the first
few that are not already present near the site.

Iteration order of ``CATEGORY_CATALOG`` is the table order below and is
relied upon for deterministic output.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from site_analyzer.models.requirements import CategoryRequirement
from site_analyzer.taxonomy.site_taxonomy import IncomeTier

_L = IncomeTier.LOW
_MO = IncomeTier.MODERATE
_MI = IncomeTier.MIDDLE
_UM = IncomeTier.UPPER_MIDDLE
_H = IncomeTier.HIGH


def _category(
    category_id: str,
    display_name: str,
    vpd: tuple[int, int],
    tiers: tuple[IncomeTier, ...],
    lot: tuple[float, float],
    brands: tuple[str, ...],
) -> CategoryRequirement:
    return CategoryRequirement(
        category_id=category_id,
        display_name=display_name,
        min_vpd=vpd[0],
        ideal_vpd=vpd[1],
        income_preferences=tiers,
        lot_size_min=lot[0],
        lot_size_ideal=lot[1],
        example_brands=brands,
    )


_CATEGORIES: tuple[CategoryRequirement, ...] = (
    # ── Core retail, dining and services ─────────────────────────────────────
    _category("big_box", "Big Box Retail", (25_000, 35_000), (_MO, _MI, _UM), (8.0, 15.0),
              ("Walmart", "Target", "Costco", "Home Depot", "Lowe's", "Best Buy", "Kohl's")),
    _category("gas_station", "Gas Station / Fuel Center", (15_000, 25_000), (_L, _MO, _MI), (0.5, 1.5),
              ("Shell", "BP", "Chevron", "RaceTrac", "Buc-ee's", "QuikTrip", "Wawa", "Sheetz")),
    _category("fast_food_value", "Value Fast Food", (12_000, 18_000), (_L, _MO), (0.4, 0.8),
              ("Hardee's", "McDonald's", "Wendy's", "Taco Bell", "Popeyes", "Little Caesars",
               "Checkers/Rally's", "Krystal", "Captain D's", "Cook Out")),
    _category("fast_food_premium", "Premium Fast Food", (15_000, 22_000), (_MI, _UM, _H), (0.5, 1.0),
              ("Chick-fil-A", "Raising Cane's", "Five Guys", "Shake Shack", "In-N-Out",
               "Whataburger", "Culver's", "PDQ")),
    _category("casual_dining_value", "Value Casual Dining", (12_000, 18_000), (_L, _MO, _MI), (0.8, 1.5),
              ("Applebee's", "IHOP", "Denny's", "Waffle House", "Cracker Barrel", "Golden Corral",
               "Huddle House")),
    _category("casual_dining_premium", "Premium Casual Dining", (15_000, 20_000), (_MI, _UM, _H), (1.0, 2.0),
              ("Olive Garden", "Red Lobster", "Texas Roadhouse", "Outback", "The Cheesecake Factory",
               "P.F. Chang's", "BJ's Restaurant")),
    _category("coffee_value", "Value Coffee/Drive-Thru", (10_000, 15_000), (_L, _MO, _MI), (0.2, 0.5),
              ("Dunkin", "Scooters", "7 Brew", "McDonald's McCafe")),
    _category("coffee_premium", "Premium Coffee", (15_000, 20_000), (_MI, _UM, _H), (0.25, 0.6),
              ("Starbucks", "Dutch Bros", "Black Rifle Coffee", "Peet's Coffee")),
    _category("quick_service_value", "Value Quick Service", (8_000, 12_000), (_L, _MO), (0.2, 0.5),
              ("Subway", "Wingstop", "Zaxby's", "Moe's", "Tropical Smoothie")),
    _category("quick_service_premium", "Premium Quick Service", (12_000, 18_000), (_MI, _UM, _H), (0.3, 0.6),
              ("Chipotle", "Jersey Mike's", "Firehouse Subs", "Panera Bread", "Cava", "Sweetgreen",
               "MOD Pizza")),
    _category("convenience", "Convenience Store", (8_000, 12_000), (_L, _MO, _MI), (0.3, 0.8),
              ("7-Eleven", "Circle K", "Wawa", "QuikTrip", "Speedway", "Casey's")),
    _category("discount_retail", "Discount Retail", (8_000, 12_000), (_L, _MO), (0.5, 1.2),
              ("Dollar General", "Dollar Tree", "Family Dollar", "Five Below", "Big Lots",
               "Save-A-Lot", "ALDI")),
    _category("retail_premium", "Premium Retail", (15_000, 22_000), (_MI, _UM, _H), (1.5, 3.0),
              ("Target", "TJ Maxx", "Ross", "Marshalls", "HomeGoods", "Ulta", "Sephora",
               "Trader Joe's", "Whole Foods")),
    _category("bank", "Bank / Financial Services", (10_000, 15_000), (_MO, _MI, _UM, _H), (0.2, 0.5),
              ("Chase", "Bank of America", "Wells Fargo", "Regions", "PNC", "Truist", "TD Bank")),
    _category("financial_services", "Check Cashing / Title Loans", (6_000, 10_000), (_L, _MO), (0.1, 0.3),
              ("Check Into Cash", "Advance America", "ACE Cash Express", "Check 'n Go", "Title Max",
               "Rent-A-Center", "Aaron's")),
    _category("pharmacy", "Pharmacy / Drugstore", (12_000, 18_000), (_MO, _MI, _UM), (0.8, 1.5),
              ("CVS", "Walgreens", "Rite Aid")),
    _category("auto_service", "Auto Service / Parts", (10_000, 15_000), (_L, _MO, _MI), (0.3, 0.7),
              ("Jiffy Lube", "AutoZone", "O'Reilly", "Advance Auto Parts", "Discount Tire",
               "Take 5 Oil Change", "Valvoline")),
    _category("auto_service_premium", "Premium Auto Service", (15_000, 20_000), (_MI, _UM, _H), (0.5, 1.0),
              ("Firestone", "Goodyear", "Caliber Collision", "Christian Brothers Auto")),
    _category("fitness", "Value Fitness", (10_000, 15_000), (_L, _MO, _MI), (1.0, 2.0),
              ("Planet Fitness", "Crunch Fitness", "Anytime Fitness", "Gold's Gym")),
    _category("fitness_premium", "Premium Fitness", (15_000, 20_000), (_MI, _UM, _H), (1.5, 3.0),
              ("LA Fitness", "Lifetime Fitness", "Orangetheory", "F45", "CrossFit", "Equinox")),
    _category("medical", "Medical / Healthcare", (8_000, 12_000), (_L, _MO, _MI, _UM, _H), (0.2, 0.5),
              ("Urgent Care", "Dental Office", "Medical Clinic", "CareNow", "AFC Urgent Care",
               "MedExpress")),
    # ── Car wash ─────────────────────────────────────────────────────────────
    _category("car_wash_express", "Express Car Wash", (15_000, 25_000), (_L, _MO, _MI), (0.4, 0.8),
              ("Zips Car Wash", "Take 5 Car Wash", "Splash Car Wash", "Goo Goo Express",
               "Whistle Express")),
    _category("car_wash_full", "Full Service Car Wash", (12_000, 20_000), (_MI, _UM, _H), (0.8, 1.5),
              ("Mister Car Wash", "Delta Sonic", "Autobell", "Flagship Carwash", "Palms Car Wash")),
    # ── Automotive ───────────────────────────────────────────────────────────
    _category("car_dealership_used", "Used Car Dealership", (15_000, 25_000), (_L, _MO, _MI), (1.5, 3.0),
              ("CarMax", "Carvana", "DriveTime", "AutoNation USA", "Enterprise Car Sales")),
    _category("car_dealership_new", "New Car Dealership", (20_000, 30_000), (_MI, _UM, _H), (3.0, 6.0),
              ("Toyota", "Honda", "Ford", "Chevrolet", "BMW", "Mercedes-Benz", "Lexus")),
    _category("tire_shop", "Tire Shop", (10_000, 18_000), (_L, _MO, _MI), (0.3, 0.6),
              ("Discount Tire", "Tire Kingdom", "Big O Tires", "Firestone", "NTB", "Mavis Tire")),
    _category("oil_change", "Oil Change / Lube", (10_000, 18_000), (_L, _MO, _MI), (0.15, 0.3),
              ("Jiffy Lube", "Valvoline", "Take 5 Oil Change", "Express Oil Change", "Grease Monkey")),
    _category("auto_body_shop", "Auto Body / Collision", (8_000, 15_000), (_MO, _MI, _UM), (0.5, 1.0),
              ("Caliber Collision", "ABRA Auto Body", "Gerber Collision", "Service King", "Maaco")),
    # ── Hotels and lodging ───────────────────────────────────────────────────
    _category("hotel_budget", "Budget Hotel / Motel", (15_000, 25_000), (_L, _MO), (1.0, 2.0),
              ("Motel 6", "Super 8", "Red Roof Inn", "Days Inn", "Econo Lodge", "Americas Best Value")),
    _category("hotel_mid_scale", "Mid-Scale Hotel", (18_000, 28_000), (_MO, _MI), (1.5, 2.5),
              ("Hampton Inn", "Holiday Inn Express", "La Quinta", "Best Western", "Comfort Inn",
               "Fairfield Inn")),
    _category("hotel_upscale", "Upscale Hotel", (20_000, 30_000), (_MI, _UM, _H), (2.0, 4.0),
              ("Marriott", "Hilton", "Hyatt", "Sheraton", "DoubleTree", "Embassy Suites", "Courtyard")),
    # ── Storage ──────────────────────────────────────────────────────────────
    _category("self_storage", "Self Storage", (8_000, 15_000), (_L, _MO, _MI, _UM), (2.0, 5.0),
              ("Public Storage", "Extra Space Storage", "CubeSmart", "Life Storage", "U-Haul",
               "StorQuest")),
    _category("rv_boat_storage", "RV / Boat Storage", (5_000, 10_000), (_MI, _UM, _H), (3.0, 8.0),
              ("Boat & RV Storage", "Good Neighbor RV", "SecurCare RV Storage")),
    # ── Childcare and education ──────────────────────────────────────────────
    _category("daycare", "Daycare / Childcare", (8_000, 12_000), (_MO, _MI, _UM), (0.5, 1.0),
              ("KinderCare", "Bright Horizons", "The Learning Experience", "Primrose Schools",
               "Kiddie Academy", "Goddard School")),
    _category("tutoring_center", "Tutoring Center", (8_000, 12_000), (_MI, _UM, _H), (0.1, 0.25),
              ("Kumon", "Mathnasium", "Sylvan Learning", "Huntington Learning", "Club Z", "Eye Level")),
    _category("trade_school", "Trade School / Vocational", (10_000, 18_000), (_L, _MO, _MI), (1.0, 2.5),
              ("UTI", "Lincoln Tech", "Paul Mitchell", "Aveda Institute", "Empire Beauty School")),
    # ── Pet services ─────────────────────────────────────────────────────────
    _category("pet_store", "Pet Store", (12_000, 18_000), (_MO, _MI, _UM), (0.8, 1.5),
              ("PetSmart", "Petco", "Pet Supplies Plus", "Hollywood Feed", "Chuck & Don's")),
    _category("vet_clinic", "Veterinary Clinic", (8_000, 12_000), (_MO, _MI, _UM, _H), (0.25, 0.5),
              ("Banfield Pet Hospital", "VCA Animal Hospital", "BluePearl",
               "Veterinary Emergency Group")),
    _category("pet_grooming", "Pet Grooming", (6_000, 10_000), (_MO, _MI, _UM), (0.1, 0.2),
              ("PetSmart Grooming", "Petco Grooming", "Dogtopia", "Scenthound", "Aussie Pet Mobile")),
    _category("doggy_daycare", "Doggy Daycare / Boarding", (8_000, 12_000), (_MI, _UM, _H), (0.5, 1.0),
              ("Camp Bow Wow", "Dogtopia", "Wag Hotels", "K9 Resorts", "Central Bark")),
    # ── Personal services ────────────────────────────────────────────────────
    _category("hair_salon", "Hair Salon (Value)", (6_000, 10_000), (_L, _MO, _MI), (0.1, 0.2),
              ("Great Clips", "Sport Clips", "Supercuts", "Cost Cutters", "Fantastic Sams")),
    _category("salon_premium", "Salon (Premium)", (10_000, 15_000), (_MI, _UM, _H), (0.15, 0.3),
              ("Ulta Salon", "Drybar", "Madison Reed", "Regis Salons", "JC Penney Salon")),
    _category("nail_salon", "Nail Salon", (6_000, 10_000), (_MO, _MI, _UM), (0.08, 0.15),
              ("Nail Garden", "Regal Nails", "Tips & Toes", "Polished Perfect")),
    _category("spa", "Spa / Massage", (10_000, 15_000), (_MI, _UM, _H), (0.15, 0.3),
              ("Massage Envy", "Hand & Stone", "European Wax Center", "Elements Massage", "Spavia")),
    _category("barbershop", "Barbershop", (5_000, 8_000), (_L, _MO, _MI), (0.05, 0.1),
              ("Floyd's 99 Barbershop", "The Boardroom", "Roosters", "V's Barbershop")),
    _category("tattoo_shop", "Tattoo Shop", (5_000, 10_000), (_L, _MO, _MI), (0.05, 0.1),
              ("Ink & Iron", "Studio 21", "Sacred Art", "Black Ink")),
    # ── Specialty retail ─────────────────────────────────────────────────────
    _category("cell_phone_store", "Cell Phone Store", (10_000, 15_000), (_L, _MO, _MI, _UM), (0.08, 0.15),
              ("Verizon", "AT&T", "T-Mobile", "Sprint", "Cricket", "Metro by T-Mobile", "Boost Mobile")),
    _category("liquor_store", "Liquor Store", (8_000, 12_000), (_L, _MO, _MI), (0.15, 0.3),
              ("Total Wine", "BevMo", "ABC Fine Wine & Spirits", "Spec's", "Twin Liquors")),
    _category("tobacco_vape", "Tobacco / Vape Shop", (6_000, 10_000), (_L, _MO), (0.05, 0.1),
              ("Smoker Friendly", "Wild Bill's Tobacco", "Tobacco Plus", "VaporFi")),
    _category("pawn_shop", "Pawn Shop", (6_000, 10_000), (_L, _MO), (0.1, 0.2),
              ("Cash America", "First Cash", "EZCorp", "SuperPawn", "Cash Pawn")),
    _category("mattress_store", "Mattress Store", (10_000, 15_000), (_MO, _MI, _UM), (0.2, 0.4),
              ("Mattress Firm", "Sleep Number", "Tempur-Pedic", "Ashley Sleep", "Purple")),
    _category("furniture_value", "Furniture (Value)", (12_000, 18_000), (_L, _MO, _MI), (1.0, 2.0),
              ("Big Lots", "At Home", "Tuesday Morning", "Rooms To Go", "American Freight")),
    _category("furniture_premium", "Furniture (Premium)", (15_000, 22_000), (_MI, _UM, _H), (1.5, 3.0),
              ("Ashley Furniture", "Pottery Barn", "Crate & Barrel", "West Elm", "Ethan Allen",
               "Restoration Hardware")),
    # ── Services ─────────────────────────────────────────────────────────────
    _category("laundromat", "Laundromat", (5_000, 8_000), (_L, _MO), (0.15, 0.3),
              ("Speed Queen", "Wash House", "Spin Cycle", "Clean Laundry")),
    _category("dry_cleaner", "Dry Cleaner", (6_000, 10_000), (_MO, _MI, _UM), (0.1, 0.2),
              ("Martinizing", "ZIPS Dry Cleaners", "Tide Cleaners", "Lapels")),
    _category("shipping_store", "Shipping / Pack Store", (8_000, 12_000), (_MO, _MI, _UM), (0.08, 0.15),
              ("The UPS Store", "FedEx Office", "Postal Connections", "PostNet", "Pak Mail")),
    _category("print_copy", "Print / Copy Center", (8_000, 12_000), (_MO, _MI, _UM), (0.1, 0.2),
              ("FedEx Office", "Staples", "Office Depot", "AlphaGraphics", "Minuteman Press")),
    # ── Specialty food and beverage ──────────────────────────────────────────
    _category("pizza_delivery", "Pizza (Delivery)", (8_000, 12_000), (_L, _MO, _MI), (0.1, 0.2),
              ("Domino's", "Pizza Hut", "Papa John's", "Little Caesars", "Marco's Pizza",
               "Hungry Howie's")),
    _category("pizza_sit_down", "Pizza (Sit-Down)", (10_000, 15_000), (_MO, _MI, _UM), (0.4, 0.8),
              ("Mellow Mushroom", "Blaze Pizza", "MOD Pizza", "Pieology", "Your Pie", "&pizza")),
    _category("ice_cream", "Ice Cream Shop", (8_000, 12_000), (_MO, _MI, _UM), (0.08, 0.15),
              ("Baskin-Robbins", "Cold Stone Creamery", "Dairy Queen", "Marble Slab", "Bruster's",
               "Handel's")),
    _category("frozen_yogurt", "Frozen Yogurt", (8_000, 12_000), (_MO, _MI, _UM), (0.08, 0.15),
              ("Menchie's", "sweetFrog", "Orange Leaf", "TCBY", "Pinkberry", "Yogurtland")),
    _category("smoothie_juice", "Smoothie / Juice Bar", (10_000, 15_000), (_MO, _MI, _UM, _H), (0.1, 0.2),
              ("Smoothie King", "Jamba", "Tropical Smoothie", "Juice It Up!", "Clean Juice", "Nekter")),
    _category("donut_bakery", "Donut / Bakery", (8_000, 12_000), (_L, _MO, _MI), (0.1, 0.2),
              ("Krispy Kreme", "Dunkin'", "Duck Donuts", "Shipley Do-Nuts", "Hurts Donut", "Cinnabon")),
    _category("sports_bar", "Sports Bar / Wings", (12_000, 18_000), (_MO, _MI), (0.6, 1.2),
              ("Buffalo Wild Wings", "Hooters", "Twin Peaks", "Walk-On's", "Tilted Kilt",
               "Miller's Ale House")),
    _category("brewery_taproom", "Brewery / Taproom", (10_000, 15_000), (_MI, _UM, _H), (0.4, 1.0),
              ("World of Beer", "Yard House", "BJ's Brewhouse", "Gordon Biersch", "Rock Bottom")),
    _category("wine_bar", "Wine Bar", (8_000, 12_000), (_MI, _UM, _H), (0.1, 0.25),
              ("Cooper's Hawk", "The Wine Loft", "Vino Volo", "Total Wine Bar")),
    _category("mexican_casual", "Mexican (Fast Casual)", (12_000, 18_000), (_L, _MO, _MI), (0.4, 0.8),
              ("Taco Bell", "Del Taco", "Taco Cabana", "Taco Bueno", "Qdoba", "Moe's")),
    _category("mexican_sit_down", "Mexican (Sit-Down)", (12_000, 18_000), (_MO, _MI, _UM), (0.8, 1.5),
              ("Chili's", "On The Border", "Chuy's", "El Fenix", "Abuelo's", "El Torito")),
    _category("asian_fast_casual", "Asian (Fast Casual)", (10_000, 15_000), (_MO, _MI, _UM), (0.3, 0.6),
              ("Panda Express", "Pei Wei", "Noodles & Company", "Pick Up Stix", "Teriyaki Madness")),
    _category("asian_sit_down", "Asian (Sit-Down)", (12_000, 18_000), (_MI, _UM, _H), (0.6, 1.2),
              ("P.F. Chang's", "Benihana", "Kona Grill", "RA Sushi", "Seasons 52")),
    # ── Entertainment ────────────────────────────────────────────────────────
    _category("movie_theater", "Movie Theater", (20_000, 30_000), (_MO, _MI, _UM), (4.0, 8.0),
              ("AMC", "Regal", "Cinemark", "Marcus Theatres", "Alamo Drafthouse", "Studio Movie Grill")),
    _category("bowling_alley", "Bowling Alley", (12_000, 18_000), (_MO, _MI), (2.0, 4.0),
              ("Bowlero", "AMF", "Main Event", "Lucky Strike", "Round1", "Dave & Buster's")),
    _category("arcade_fec", "Arcade / Family Entertainment", (15_000, 22_000), (_MO, _MI, _UM), (1.5, 3.0),
              ("Dave & Buster's", "Main Event", "Round1", "Chuck E. Cheese", "Scene75", "Andretti")),
    _category("trampoline_park", "Trampoline Park", (12_000, 18_000), (_MO, _MI), (1.5, 2.5),
              ("Sky Zone", "Urban Air", "Launch Trampoline", "Altitude", "Rockin' Jump", "Defy")),
    _category("mini_golf", "Mini Golf / Driving Range", (10_000, 15_000), (_MO, _MI), (1.0, 2.0),
              ("Topgolf", "Drive Shack", "PopStroke", "Puttshack", "Monster Mini Golf")),
    _category("martial_arts", "Martial Arts Studio", (6_000, 10_000), (_MO, _MI, _UM), (0.15, 0.3),
              ("ATA Martial Arts", "Premier Martial Arts", "TITLE Boxing", "9Round", "UFC Gym")),
    _category("yoga_pilates", "Yoga / Pilates Studio", (8_000, 12_000), (_MI, _UM, _H), (0.1, 0.2),
              ("CorePower Yoga", "Club Pilates", "Pure Barre", "YogaWorks", "Bikram Yoga")),
    _category("dance_studio", "Dance Studio", (6_000, 10_000), (_MO, _MI, _UM), (0.15, 0.3),
              ("Arthur Murray", "Fred Astaire", "Dance With Me", "Jazzercise")),
    # ── Grocery ──────────────────────────────────────────────────────────────
    _category("grocery_value", "Grocery (Value)", (15_000, 22_000), (_L, _MO, _MI), (1.5, 3.0),
              ("ALDI", "Lidl", "Save-A-Lot", "WinCo", "Food 4 Less", "Grocery Outlet")),
    _category("grocery_mid", "Grocery (Mid-Tier)", (18_000, 28_000), (_MO, _MI, _UM), (3.0, 5.0),
              ("Kroger", "Publix", "H-E-B", "Albertsons", "Safeway", "Food Lion", "Harris Teeter")),
    _category("grocery_premium", "Grocery (Premium)", (20_000, 30_000), (_UM, _H), (2.0, 4.0),
              ("Whole Foods", "Trader Joe's", "Sprouts", "Fresh Market", "Natural Grocers")),
    # ── Travel ───────────────────────────────────────────────────────────────
    _category("truck_stop", "Truck Stop / Travel Center", (25_000, 40_000), (_L, _MO), (5.0, 15.0),
              ("Pilot Flying J", "Love's Travel Stops", "TA Travel Centers", "Petro", "Sapp Bros")),
    # ── College town favourites ──────────────────────────────────────────────
    # Census income understates spending power in student markets, hence the
    # broad tier lists.
    _category("college_town_fast_casual", "College Town Fast Casual", (10_000, 18_000),
              (_L, _MO, _MI, _UM), (0.4, 0.8),
              ("Chick-fil-A", "Chipotle", "Raising Cane's", "Wingstop", "Panda Express",
               "Moe's Southwest Grill", "Blaze Pizza", "Five Guys")),
    _category("college_town_coffee", "College Town Coffee & Cafe", (8_000, 15_000),
              (_L, _MO, _MI, _UM), (0.2, 0.5),
              ("Starbucks", "Dunkin'", "Panera Bread", "McAlister's Deli", "Scooters Coffee",
               "Dutch Bros")),
    _category("college_town_late_night", "College Town Late Night", (8_000, 12_000), (_L, _MO), (0.3, 0.6),
              ("Insomnia Cookies", "Waffle House", "Cookout", "Taco Bell", "Jimmy John's", "Domino's",
               "Papa John's")),
    _category("college_town_services", "College Town Services", (6_000, 10_000), (_L, _MO, _MI), (0.2, 0.5),
              ("Planet Fitness", "Urgent Care", "Phone Repair", "Print/Copy Shop", "Great Clips",
               "Sport Clips")),
    _category("college_town_entertainment", "College Town Entertainment", (10_000, 15_000),
              (_L, _MO, _MI), (0.5, 1.5),
              ("Buffalo Wild Wings", "Sports Bar", "Brewpub", "Topgolf", "Dave & Buster's", "Main Event")),
)


CATEGORY_CATALOG: Mapping[str, CategoryRequirement] = MappingProxyType(
    {c.category_id: c for c in _CATEGORIES}
)
"""Read-only id → ``CategoryRequirement`` map, in table order."""

VALUE_CATEGORIES: frozenset[str] = frozenset({
    "fast_food_value",
    "casual_dining_value",
    "coffee_value",
    "quick_service_value",
    "discount_retail",
})
"""Budget-oriented categories excluded in upper-middle / high income areas."""


def get_category(category_id: str) -> CategoryRequirement:
    """Return the catalog entry for ``category_id``.

    Raises:
        KeyError: If the id is not in the catalog.
    """
    try:
        return CATEGORY_CATALOG[category_id]
    except KeyError:
        raise KeyError(
            f"Unknown category '{category_id}'. "
            f"Known ids: {', '.join(CATEGORY_CATALOG)}"
        ) from None


def load_category_catalog() -> Mapping[str, CategoryRequirement]:
    """Return the process-wide category catalog.

    The catalog is immutable, so every caller shares the same mapping.
    """
    if len(CATEGORY_CATALOG) != len(_CATEGORIES):
        raise ValueError("Duplicate category_id in the category table.")
    return CATEGORY_CATALOG
