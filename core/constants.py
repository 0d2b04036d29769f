# ==============================================================================
#  CESIM "RESULTS" SHEET LAYOUT
# ==============================================================================
# Row/column indices are 0-based positions in the first sheet of the workbook
# (row 0 == Excel row 1, column 0 == column A).

TEAM_HEADER_ROW = 2
TEAM_FIRST_COL = 1
TEAM_LAST_COL = 10

# Data kind -> field -> row index. None means the template has no cell for it.
CELL_MAP = {
    'performances': {
        'revenue_global': 3,
        'ebitda_global': 16,
        'ebit_global': 19,
        'net_income_global': 25,

        'revenue_usa': 63,
        'ebitda_usa': 77,
        'ebit_usa': 80,
        'net_income_usa': 104,

        'revenue_europe': 215,
        'ebitda_europe': 136,
        'ebit_europe': 139,
        'net_income_europe': 253,

        'revenue_asia': 157,
        'ebitda_asia': 175,
        'ebit_asia': 178,
        'net_income_asia': 185,

        'cumulative_return': 202,
        'share_price': 203,
    },
    'market_shares': {
        'market_share_global': 298,
        'tech1_share_global': 300,
        'tech2_share_global': 301,
        'tech3_share_global': 302,
        'tech4_share_global': 303,

        'market_share_usa': 342,
        'tech1_share_usa': 344,
        'tech2_share_usa': 345,
        'tech3_share_usa': 346,
        'tech4_share_usa': 347,

        # Asia block sits before Europe in the sheet
        'market_share_asia': 386,
        'tech1_share_asia': 388,
        'tech2_share_asia': 389,
        'tech3_share_asia': 390,
        'tech4_share_asia': 391,

        'market_share_europe': 430,
        'tech1_share_europe': 432,
        'tech2_share_europe': 433,
        'tech3_share_europe': 434,
        'tech4_share_europe': 435,
    },
    'hr': {
        'monthly_salary': 598,
        'training_budget': 599,
        'rd_staff': 601,
        'turnover_rate': 602,
        'man_days_allocation': 604,
        'productivity_coefficient': 606,
    },
    'productions': {
        'tech1_production_usa': 444,
        'tech2_production_usa': 445,
        'tech3_production_usa': 446,
        'tech4_production_usa': 447,

        'tech1_production_asia': 450,
        'tech2_production_asia': 451,
        'tech3_production_asia': 452,
        'tech4_production_asia': 453,

        'plants_usa': 511,
        'plants_asia': 520,

        'capacity_usa': None,
        'capacity_asia': None,
        'network_coverage': None,
    },
    'financials': {
        'fixed_assets': 32,
        'inventories': 33,
        'receivables': 34,
        'cash': 35,
        'total_assets': 36,

        'share_capital': 40,
        'share_premium': 41,
        'net_result': 42,
        'retained_earnings': 43,
        'total_equity': 44,

        'long_term_debt': 47,
        'short_term_debt': 48,
        'trade_payables': 49,
        'total_debt': 50,
        'total_liabilities': 52,
    },
}

DATA_KINDS = tuple(CELL_MAP.keys())

KIND_LABELS = {
    'performances': 'Performance',
    'market_shares': 'Market Share',
    'hr': 'Human Resources',
    'productions': 'Production',
    'financials': 'Balance Sheet',
}

# ==============================================================================
#  RANKINGS & CHARTS
# ==============================================================================

METRIC_OPTIONS = {
    'performances': [
        ('revenue_global', 'Global Revenue'),
        ('net_income_global', 'Global Net Income'),
        ('ebitda_global', 'Global EBITDA'),
        ('share_price', 'Share Price'),
        ('cumulative_return', 'Cumulative Return'),
    ],
    'market_shares': [
        ('market_share_global', 'Global Market Share'),
        ('market_share_usa', 'USA Market Share'),
        ('market_share_europe', 'Europe Market Share'),
        ('market_share_asia', 'Asia Market Share'),
    ],
    'productions': [
        ('plants_usa', 'Plants USA'),
        ('plants_asia', 'Plants Asia'),
        ('capacity_usa', 'Capacity USA'),
        ('capacity_asia', 'Capacity Asia'),
        ('network_coverage', 'Network Coverage'),
    ],
    'financials': [
        ('total_assets', 'Total Assets'),
        ('total_equity', 'Equity'),
        ('cash', 'Cash'),
        ('total_debt', 'Total Debt'),
    ],
    'hr': [
        ('rd_staff', 'R&D Staff'),
        ('turnover_rate', 'Turnover Rate'),
        ('training_budget', 'Training Budget'),
        ('monthly_salary', 'Monthly Salary'),
    ],
}

# Ranked ascending, a lower value wins
LOWER_IS_BETTER = {'turnover_rate'}

PERCENT_FIELDS_PREFIXES = ('market_share_', 'tech1_share_', 'tech2_share_', 'tech3_share_', 'tech4_share_')
PERCENT_FIELDS = {'turnover_rate', 'network_coverage', 'man_days_allocation'}

# KPI cards on the dashboard: (kind, field, label)
KPI_CARDS = [
    ('performances', 'revenue_global', 'Global Revenue'),
    ('performances', 'net_income_global', 'Net Income'),
    ('market_shares', 'market_share_global', 'Global Market Share'),
    ('performances', 'share_price', 'Share Price'),
]

# Rounds table: sort key -> (source, field)
ROUND_SORT_FIELDS = {
    'number': ('round', 'number'),
    'date': ('round', 'date'),
    'revenue_global': ('performance', 'revenue_global'),
    'net_income_global': ('performance', 'net_income_global'),
    'revenue_europe': ('performance', 'revenue_europe'),
    'net_income_europe': ('performance', 'net_income_europe'),
    'market_share_europe': ('market_share', 'market_share_europe'),
}

ROUND_SORT_LABELS = [
    ('number', 'Round'),
    ('date', 'Date'),
    ('revenue_global', 'Global Revenue'),
    ('net_income_global', 'Global Net Income'),
    ('revenue_europe', 'Europe Revenue'),
    ('net_income_europe', 'Europe Net Income'),
    ('market_share_europe', 'Europe Market Share'),
]
