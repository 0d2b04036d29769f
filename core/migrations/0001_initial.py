import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Round',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.IntegerField()),
                ('date', models.DateField()),
                ('comment', models.TextField(blank=True, default='')),
            ],
            options={
                'ordering': ['number'],
            },
        ),
        migrations.CreateModel(
            name='Team',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=120, unique=True)),
                ('is_my_team', models.BooleanField(default=False)),
            ],
            options={
                'ordering': ['-is_my_team', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Performance',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('revenue_global', models.FloatField(default=0)),
                ('net_income_global', models.FloatField(default=0)),
                ('ebitda_global', models.FloatField(default=0)),
                ('ebit_global', models.FloatField(default=0)),
                ('revenue_usa', models.FloatField(default=0)),
                ('net_income_usa', models.FloatField(default=0)),
                ('ebitda_usa', models.FloatField(default=0)),
                ('ebit_usa', models.FloatField(default=0)),
                ('revenue_europe', models.FloatField(default=0)),
                ('net_income_europe', models.FloatField(default=0)),
                ('ebitda_europe', models.FloatField(default=0)),
                ('ebit_europe', models.FloatField(default=0)),
                ('revenue_asia', models.FloatField(default=0)),
                ('net_income_asia', models.FloatField(default=0)),
                ('ebitda_asia', models.FloatField(default=0)),
                ('ebit_asia', models.FloatField(default=0)),
                ('cumulative_return', models.FloatField(default=0)),
                ('share_price', models.FloatField(default=0)),
                ('round', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='core.round')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='core.team')),
            ],
        ),
        migrations.CreateModel(
            name='MarketShare',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('market_share_global', models.FloatField(default=0)),
                ('tech1_share_global', models.FloatField(default=0)),
                ('tech2_share_global', models.FloatField(default=0)),
                ('tech3_share_global', models.FloatField(default=0)),
                ('tech4_share_global', models.FloatField(default=0)),
                ('market_share_usa', models.FloatField(default=0)),
                ('tech1_share_usa', models.FloatField(default=0)),
                ('tech2_share_usa', models.FloatField(default=0)),
                ('tech3_share_usa', models.FloatField(default=0)),
                ('tech4_share_usa', models.FloatField(default=0)),
                ('market_share_europe', models.FloatField(default=0)),
                ('tech1_share_europe', models.FloatField(default=0)),
                ('tech2_share_europe', models.FloatField(default=0)),
                ('tech3_share_europe', models.FloatField(default=0)),
                ('tech4_share_europe', models.FloatField(default=0)),
                ('market_share_asia', models.FloatField(default=0)),
                ('tech1_share_asia', models.FloatField(default=0)),
                ('tech2_share_asia', models.FloatField(default=0)),
                ('tech3_share_asia', models.FloatField(default=0)),
                ('tech4_share_asia', models.FloatField(default=0)),
                ('round', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='core.round')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='core.team')),
            ],
        ),
        migrations.CreateModel(
            name='HrData',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('rd_staff', models.IntegerField(default=0)),
                ('turnover_rate', models.FloatField(default=0)),
                ('training_budget', models.IntegerField(default=0)),
                ('monthly_salary', models.IntegerField(default=0)),
                ('man_days_allocation', models.FloatField(default=0)),
                ('productivity_coefficient', models.FloatField(default=0)),
                ('round', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='core.round')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='core.team')),
            ],
            options={
                'verbose_name': 'HR data',
                'verbose_name_plural': 'HR data',
            },
        ),
        migrations.CreateModel(
            name='Production',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tech1_production_usa', models.IntegerField(default=0)),
                ('tech2_production_usa', models.IntegerField(default=0)),
                ('tech3_production_usa', models.IntegerField(default=0)),
                ('tech4_production_usa', models.IntegerField(default=0)),
                ('tech1_production_asia', models.IntegerField(default=0)),
                ('tech2_production_asia', models.IntegerField(default=0)),
                ('tech3_production_asia', models.IntegerField(default=0)),
                ('tech4_production_asia', models.IntegerField(default=0)),
                ('plants_usa', models.IntegerField(default=0)),
                ('plants_asia', models.IntegerField(default=0)),
                ('capacity_usa', models.FloatField(default=0)),
                ('capacity_asia', models.FloatField(default=0)),
                ('network_coverage', models.FloatField(default=0)),
                ('round', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='core.round')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='core.team')),
            ],
        ),
        migrations.CreateModel(
            name='Financial',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('fixed_assets', models.FloatField(default=0)),
                ('inventories', models.FloatField(default=0)),
                ('receivables', models.FloatField(default=0)),
                ('cash', models.FloatField(default=0)),
                ('total_assets', models.FloatField(default=0)),
                ('share_capital', models.FloatField(default=0)),
                ('share_premium', models.FloatField(default=0)),
                ('net_result', models.FloatField(default=0)),
                ('retained_earnings', models.FloatField(default=0)),
                ('total_equity', models.FloatField(default=0)),
                ('long_term_debt', models.FloatField(default=0)),
                ('short_term_debt', models.FloatField(default=0)),
                ('trade_payables', models.FloatField(default=0)),
                ('total_debt', models.FloatField(default=0)),
                ('total_liabilities', models.FloatField(default=0)),
                ('round', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='core.round')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='core.team')),
            ],
        ),
    ]
