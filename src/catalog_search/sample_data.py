"""Sample catalog used by the CLI and the seed script."""

from decimal import Decimal

SAMPLE_PRODUCTS = [
    {
        "slug": "sr-42u-smart",
        "name": "SR-42U Smart Rack",
        "description": "Intelligent 42U server rack with advanced monitoring capabilities and thermal management",
        "price": Decimal("2450.00"),
        "category": "server-racks",
        "domain": "it-infrastructure",
        "tags": ["smart", "42u", "monitoring", "intelligent", "thermal", "enterprise"],
        "specifications": {
            "height": "42U (2000mm)",
            "depth": "800mm",
            "width": "600mm",
            "loadCapacity": "1000kg",
            "material": "Cold-rolled steel",
            "ventilation": "Front-to-back airflow",
            "monitoring": "Temperature, humidity, door access",
        },
        "features": ["Smart monitoring", "Cable management", "Adjustable rails", "Lockable doors"],
        "availability": "In Stock",
        "rating": 4.8,
    },
    {
        "slug": "sv-42u-server",
        "name": "SV-42U Server Rack",
        "description": "Standard 42U server rack optimized for data center applications with enhanced cable management",
        "price": Decimal("1650.00"),
        "category": "server-racks",
        "domain": "it-infrastructure",
        "tags": ["server", "42u", "standard", "datacenter", "cable-management"],
        "specifications": {
            "height": "42U (2000mm)",
            "depth": "1000mm",
            "width": "600mm",
            "loadCapacity": "1200kg",
            "finish": "Black RAL 9005",
            "doors": "Perforated front and rear",
        },
        "features": ["Tool-free assembly", "Adjustable depth", "Cable management", "Ventilation"],
        "availability": "In Stock",
        "rating": 4.6,
    },
    {
        "slug": "dcr-42u-datacentre",
        "name": "DCR-42U Data Centre Rack",
        "description": "High-density data centre rack with advanced thermal management and maximum load capacity",
        "price": Decimal("3200.00"),
        "category": "server-racks",
        "domain": "it-infrastructure",
        "tags": ["datacenter", "42u", "thermal", "high-density", "enterprise", "cooling"],
        "specifications": {
            "height": "42U (2000mm)",
            "depth": "1200mm",
            "loadCapacity": "1500kg",
            "cooling": "Integrated thermal management",
            "power": "Built-in PDU options",
        },
        "features": ["Maximum load capacity", "Thermal optimization", "Power distribution"],
        "availability": "Made to Order",
        "rating": 4.9,
    },
    {
        "slug": "nc-27u-network",
        "name": "NC-27U Network Cabinet",
        "description": "Compact 27U network cabinet perfect for office and small data center environments",
        "price": Decimal("890.00"),
        "category": "network-cabinets",
        "domain": "it-infrastructure",
        "tags": ["network", "27u", "compact", "office", "switching"],
        "specifications": {
            "height": "27U (1350mm)",
            "depth": "600mm",
            "loadCapacity": "800kg",
            "doors": "Glass front, steel rear",
        },
        "features": ["Compact design", "Glass door", "Cable management", "Ventilation fans"],
        "availability": "In Stock",
        "rating": 4.5,
    },
    {
        "slug": "ot-600-outdoor",
        "name": "OT-600 Outdoor Cabinet",
        "description": "Weatherproof outdoor telecommunications cabinet with superior environmental protection",
        "price": Decimal("1980.00"),
        "category": "outdoor-equipment",
        "domain": "telecommunications",
        "tags": ["outdoor", "weatherproof", "telecom", "cabinet", "ip65", "galvanized"],
        "specifications": {
            "protection": "IP65",
            "material": "Galvanized Steel",
            "temperature": "-40°C to +70°C",
            "coating": "Polyester powder coating",
        },
        "features": ["Weather resistant", "Corrosion protection", "Natural cooling", "Easy access"],
        "availability": "In Stock",
        "rating": 4.7,
    },
    {
        "slug": "of-sc-connectors",
        "name": "OF-SC Fiber Connectors",
        "description": "Premium SC type fiber optic connectors with ultra-low insertion loss",
        "price": Decimal("4.50"),
        "category": "fiber-optics",
        "domain": "telecommunications",
        "tags": ["fiber", "connectors", "sc", "optical", "low-loss", "precision"],
        "specifications": {
            "type": "SC/UPC",
            "insertionLoss": "<0.2dB",
            "returnLoss": ">50dB",
            "durability": ">1000 mating cycles",
        },
        "features": ["Ultra-low loss", "High durability", "Precision alignment", "Quality tested"],
        "availability": "In Stock",
        "rating": 4.8,
    },
]
