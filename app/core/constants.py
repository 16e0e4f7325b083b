"""Answer vocabularies used by the public form and the dashboard filters."""

VEHICLE_TYPES = (
    "Automóvil",
    "SUV",
    "Vehiculo comercial/carga de menos de 4Ton",
    "ebike",
    "Bicicleta",
    "Scooter",
)

USAGE_TYPES = (
    "personal",
    "Trabajo",
    "Domicilios",
    "Taxi",
)

# Daily distance is collected as one of these buckets, never as a raw number.
AVERAGE_KMS_PER_DAY = (
    "Menos de 10Km",
    "Más de 10Km y menos de 50Km",
    "Por encima de 50Km",
)

PRIMARY_CHARGING_LOCATIONS = (
    "Casa",
    "Trabajo",
    "Comercio",
    "Academia/Gym",
    "Parqueadero Publico",
)

CHARGER_TYPES = (
    "Cargador portatil a 110V",
    "Cargador de pared AC 7 - 22kw",
    "Cargador DC hasta 50Kw",
)

COST_PER_KWH = (
    "Gratis",
    "Menos de $1000 COP",
    "Entre $1000 y $2000 COP",
    "Más de $2000 COP",
)

# Filter value meaning "no constraint".
FILTER_ALL = "all"
