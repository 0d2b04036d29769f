from django.db import models            # type:ignore


class Team(models.Model):
    name = models.CharField(max_length=120, unique=True)
    is_my_team = models.BooleanField(default=False)

    class Meta:
        ordering = ['-is_my_team', 'name']

    def __str__(self):
        return f"{self.name} (my team)" if self.is_my_team else self.name


class Round(models.Model):
    number = models.IntegerField()
    date = models.DateField()
    comment = models.TextField(blank=True, default='')

    class Meta:
        ordering = ['number']

    def __str__(self):
        return f"Round {self.number}"


class RoundRecord(models.Model):
    """One row of a data kind for a (team, round) pair.

    Uniqueness per pair is kept by the importer, there is no DB constraint.
    """
    team = models.ForeignKey(Team, on_delete=models.CASCADE)
    round = models.ForeignKey(Round, on_delete=models.CASCADE)

    class Meta:
        abstract = True

    def __str__(self):
        return f"{self.__class__.__name__} {self.team.name} / R{self.round.number}"


# --- 1. Performance (income statement + share) ---
class Performance(RoundRecord):
    revenue_global = models.FloatField(default=0)
    net_income_global = models.FloatField(default=0)
    ebitda_global = models.FloatField(default=0)
    ebit_global = models.FloatField(default=0)

    revenue_usa = models.FloatField(default=0)
    net_income_usa = models.FloatField(default=0)
    ebitda_usa = models.FloatField(default=0)
    ebit_usa = models.FloatField(default=0)

    revenue_europe = models.FloatField(default=0)
    net_income_europe = models.FloatField(default=0)
    ebitda_europe = models.FloatField(default=0)
    ebit_europe = models.FloatField(default=0)

    revenue_asia = models.FloatField(default=0)
    net_income_asia = models.FloatField(default=0)
    ebitda_asia = models.FloatField(default=0)
    ebit_asia = models.FloatField(default=0)

    cumulative_return = models.FloatField(default=0)
    share_price = models.FloatField(default=0)


# --- 2. Market share (overall + per technology) ---
class MarketShare(RoundRecord):
    market_share_global = models.FloatField(default=0)
    tech1_share_global = models.FloatField(default=0)
    tech2_share_global = models.FloatField(default=0)
    tech3_share_global = models.FloatField(default=0)
    tech4_share_global = models.FloatField(default=0)

    market_share_usa = models.FloatField(default=0)
    tech1_share_usa = models.FloatField(default=0)
    tech2_share_usa = models.FloatField(default=0)
    tech3_share_usa = models.FloatField(default=0)
    tech4_share_usa = models.FloatField(default=0)

    market_share_europe = models.FloatField(default=0)
    tech1_share_europe = models.FloatField(default=0)
    tech2_share_europe = models.FloatField(default=0)
    tech3_share_europe = models.FloatField(default=0)
    tech4_share_europe = models.FloatField(default=0)

    market_share_asia = models.FloatField(default=0)
    tech1_share_asia = models.FloatField(default=0)
    tech2_share_asia = models.FloatField(default=0)
    tech3_share_asia = models.FloatField(default=0)
    tech4_share_asia = models.FloatField(default=0)


# --- 3. HR ---
class HrData(RoundRecord):
    rd_staff = models.IntegerField(default=0)
    turnover_rate = models.FloatField(default=0)
    training_budget = models.IntegerField(default=0)
    monthly_salary = models.IntegerField(default=0)
    man_days_allocation = models.FloatField(default=0)
    productivity_coefficient = models.FloatField(default=0)

    class Meta:
        verbose_name = 'HR data'
        verbose_name_plural = 'HR data'


# --- 4. Production ---
class Production(RoundRecord):
    tech1_production_usa = models.IntegerField(default=0)
    tech2_production_usa = models.IntegerField(default=0)
    tech3_production_usa = models.IntegerField(default=0)
    tech4_production_usa = models.IntegerField(default=0)

    tech1_production_asia = models.IntegerField(default=0)
    tech2_production_asia = models.IntegerField(default=0)
    tech3_production_asia = models.IntegerField(default=0)
    tech4_production_asia = models.IntegerField(default=0)

    plants_usa = models.IntegerField(default=0)
    plants_asia = models.IntegerField(default=0)

    capacity_usa = models.FloatField(default=0)
    capacity_asia = models.FloatField(default=0)
    network_coverage = models.FloatField(default=0)


# --- 5. Balance sheet ---
class Financial(RoundRecord):
    fixed_assets = models.FloatField(default=0)
    inventories = models.FloatField(default=0)
    receivables = models.FloatField(default=0)
    cash = models.FloatField(default=0)
    total_assets = models.FloatField(default=0)

    share_capital = models.FloatField(default=0)
    share_premium = models.FloatField(default=0)
    net_result = models.FloatField(default=0)
    retained_earnings = models.FloatField(default=0)
    total_equity = models.FloatField(default=0)

    long_term_debt = models.FloatField(default=0)
    short_term_debt = models.FloatField(default=0)
    trade_payables = models.FloatField(default=0)
    total_debt = models.FloatField(default=0)
    total_liabilities = models.FloatField(default=0)
