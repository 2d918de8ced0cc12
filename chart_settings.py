# chart_settings.py
# Settings for the Regional Strengths radial dashboard. Edit the right hand
# side of anything below; the app picks it up on the next start.

DATA_FILE = "data.csv"
REGIONS_FILE = "regions.csv"

# Column names in the two CSV files
INDICATOR_COLUMN = "indicator"
ISO_COLUMN = "ISO Country code"
REGION_COLUMN = "Region"

# Rows of data.csv whose indicator column is one of these hold metadata,
# not country values, and are dropped on load
METADATA_INDICATORS = ("source", "URL", "notes", "data year")

# The six comparison regions (order is the order of the dots on each spoke)
REGION_LIST = [
    "Americas",
    "East Asia & Pacific",
    "Europe & Central Asia",
    "Middle East & North Africa",
    "South Asia",
    "Sub-Saharan Africa",
]

DEFAULT_REGION = REGION_LIST[0]

# Metrics to plot. "key" must match a data.csv column name exactly
# (some of them contain line breaks). higher_better=False means a lower
# value is the stronger one, e.g. infant mortality.
METRICS = [
    {"key": "GINI index", "label": "GINI Index", "higher_better": False},
    {"key": "happy planet index", "label": "Happy Planet Index", "higher_better": True},
    {"key": "human development index", "label": "Human Development Index", "higher_better": True},
    {"key": "sustainable economic development assessment (SEDA)", "label": "SEDA Score", "higher_better": True},
    {"key": "GDP growth\n(annual %)", "label": "GDP Growth (% / yr)", "higher_better": True},
    {"key": "GDP per capita in $ (PPP)", "label": "GDP per Capita (PPP)", "higher_better": True},
    {"key": "health expenditure \n% of GDP", "label": "Health Exp. (% of GDP)", "higher_better": True},
    {"key": "health expenditure \nper person", "label": "Health Exp. per Person", "higher_better": True},
    {"key": "infant mortality", "label": "Infant Mortality", "higher_better": False},
    {"key": "education expenditure\n% of GDP", "label": "Education Exp. (% of GDP)", "higher_better": True},
    {"key": "unemployment (%)", "label": "Unemployment (%)", "higher_better": False},
    {"key": "% of population in extreme poverty", "label": "Extreme Poverty (%)", "higher_better": False},
    {"key": "% of population with access to electricity", "label": "Electricity Access (%)", "higher_better": True},
    {"key": "political stability & absence of violence", "label": "Political Stability", "higher_better": True},
    {"key": "government effectiveness", "label": "Gov. Effectiveness", "higher_better": True},
    {"key": "rule of law", "label": "Rule of Law", "higher_better": True},
    {"key": "control of corruption", "label": "Control of Corruption", "higher_better": True},
    {"key": "overall economic freedom score", "label": "Economic Freedom", "higher_better": True},
    {"key": "CO2e emissions per capita", "label": "CO₂ Emissions per Capita", "higher_better": False},
    {"key": "share of electricity from renewables generation", "label": "Renewables Share (%)", "higher_better": True},
    {"key": "% of seats held by women in national parliaments", "label": "Women in Parliament (%)", "higher_better": True},
    {"key": "Military Spending as % of GDP", "label": "Military Spending (% of GDP)", "higher_better": False},
]

# ----- Layout of the radial chart (all radii in chart units) -----
INNER_RADIUS = 150
OUTER_RADIUS = 350
# Fraction of each band left empty between neighbouring wedges
BAND_PADDING = 0.05

# Ring offsets relative to the radii above
WEDGE_INNER_OFFSET = -20   # background wedge starts inside the inner radius
WEDGE_OUTER_OFFSET = 30
LABEL_OFFSET = 20
STRENGTH_ARC_OFFSETS = (35, 45)

# Dot sizes (radius) for the selected region and the rest
SELECTED_DOT_RADIUS = 7
OTHER_DOT_RADIUS = 4

# Colours
SELECTED_COLOR = "#e4572e"
OTHER_COLOR = "#4c78a8"
WEDGE_COLOR = "rgba(200, 200, 200, 0.25)"
AXIS_COLOR = "#bbbbbb"
CONNECTOR_COLOR = "#888888"
STRENGTH_ARC_COLOR = "#7b3294"

CHART_HEIGHT = 900
