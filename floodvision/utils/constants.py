"""Project-wide constants."""

RISK_LEVELS = ["low", "medium", "high", "severe"]

# band -> probability increase (%), affected population
RISK_BANDS = {
    "severe": {"probability_increase": 40, "affected_population": 2_000_000},
    "high": {"probability_increase": 25, "affected_population": 1_200_000},
    "medium": {"probability_increase": 15, "affected_population": 600_000},
    "low": {"probability_increase": 5, "affected_population": 200_000},
}

RIVER_TRENDS = ["rising", "falling", "stable"]

STAKEHOLDER_TYPES = ["emergency_manager", "researcher"]

# Jan..Dec
SEASONAL_COEFFICIENTS = [1.2, 1.1, 0.9, 0.8, 0.7, 0.5, 0.4, 0.6, 0.8, 1.0, 1.1, 1.3]

INDIA_CENTROID = (20.5937, 78.9629)

REGIONS = {
    "mumbai": {"label": "Mumbai", "state": "Maharashtra", "coordinates": (19.076, 72.8777)},
    "delhi": {"label": "Delhi", "state": "Delhi", "coordinates": (28.66, 77.2167)},
    "bangalore": {"label": "Bengaluru", "state": "Karnataka", "coordinates": (12.9719, 77.5937)},
    "hyderabad": {"label": "Hyderabad", "state": "Telangana", "coordinates": (17.385, 78.4867)},
    "ahmedabad": {"label": "Ahmedabad", "state": "Gujarat", "coordinates": (23.03, 72.58)},
    "chennai": {"label": "Chennai", "state": "Tamil Nadu", "coordinates": (13.0825, 80.275)},
    "kolkata": {"label": "Kolkata", "state": "West Bengal", "coordinates": (22.5667, 88.3667)},
    "surat": {"label": "Surat", "state": "Gujarat", "coordinates": (21.1667, 72.8333)},
    "pune": {"label": "Pune", "state": "Maharashtra", "coordinates": (18.5203, 73.8567)},
    "jaipur": {"label": "Jaipur", "state": "Rajasthan", "coordinates": (26.9167, 75.8167)},
    "lucknow": {"label": "Lucknow", "state": "Uttar Pradesh", "coordinates": (26.8467, 80.9462)},
    "kanpur": {"label": "Kanpur", "state": "Uttar Pradesh", "coordinates": (26.4667, 80.35)},
    "nagpur": {"label": "Nagpur", "state": "Maharashtra", "coordinates": (21.1497, 79.0806)},
    "patna": {"label": "Patna", "state": "Bihar", "coordinates": (25.61, 85.1417)},
    "indore": {"label": "Indore", "state": "Madhya Pradesh", "coordinates": (22.7167, 75.8472)},
    "kochi": {"label": "Kochi", "state": "Kerala", "coordinates": (9.9667, 76.2833)},
    "guwahati": {"label": "Guwahati", "state": "Assam", "coordinates": (26.1833, 91.75)},
}

# Alternate and historical city names
REGION_ALIASES = {"bengaluru": "bangalore", "madras": "chennai", "bombay": "mumbai", "calcutta": "kolkata"}

REGION_RESERVOIRS = {
    "mumbai": ["Tansa", "Vihar", "Tulsi", "Vaitarna"],
    "delhi": ["Yamuna", "Bhakra"],
    "kolkata": ["Damodar Valley", "Farakka"],
    "chennai": ["Poondi", "Cholavaram", "Redhills", "Chembarambakkam"],
    "bangalore": ["Cauvery", "Kabini", "Krishna Raja Sagara"],
    "hyderabad": ["Nagarjuna Sagar", "Srisailam"],
    "ahmedabad": ["Sardar Sarovar", "Ukai"],
    "pune": ["Khadakwasla", "Panshet", "Warasgaon"],
    "surat": ["Ukai", "Kadana"],
    "jaipur": ["Bisalpur", "Mahi Bajaj Sagar"],
    "lucknow": ["Rihand", "Obra"],
    "kanpur": ["Rihand", "Mata Tila"],
    "nagpur": ["Gosikhurd", "Totladoh"],
    "patna": ["Sone", "Kosi"],
    "indore": ["Omkareshwar", "Bargi"],
    "kochi": ["Idukki", "Mullaperiyar"],
    "guwahati": ["Kopili", "Umiam"],
}

STATE_RIVERS = {
    "Maharashtra": "Godavari",
    "West Bengal": "Hooghly",
    "Tamil Nadu": "Cauvery",
    "Delhi": "Yamuna",
    "Karnataka": "Krishna",
    "Kerala": "Periyar",
    "Assam": "Brahmaputra",
    "Bihar": "Ganga",
    "Uttar Pradesh": "Yamuna",
    "Telangana": "Krishna",
    "Gujarat": "Sabarmati",
    "Rajasthan": "Luni",
    "Madhya Pradesh": "Narmada",
}

# IMD daily rainfall categories, upper bound (mm) exclusive
RAINFALL_CATEGORIES = [
    (2.5, "no_rain"),
    (7.5, "light"),
    (35.5, "moderate"),
    (64.4, "heavy"),
    (124.4, "very_heavy"),
]
