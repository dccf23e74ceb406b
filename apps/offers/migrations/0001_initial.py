import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('contacts', '0001_initial'),
        ('deals', '0001_initial'),
        ('properties', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Offer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('offer_code', models.CharField(max_length=255, unique=True)),
                ('requested_sqm', models.FloatField(blank=True, null=True)),
                ('requested_type', models.CharField(blank=True, max_length=10)),
                ('requested_start_date', models.DateField(blank=True, null=True)),
                ('requested_locations', models.JSONField(blank=True, default=list)),
                ('downloadable', models.BooleanField(default=False)),
                ('sent_at', models.DateTimeField(blank=True, null=True)),
                ('feedback', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='offers', to='contacts.company')),
                ('person', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='offers', to='contacts.person')),
                ('request', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='offers', to='deals.propertyrequest')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='offers', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='OfferGroup',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('status', models.CharField(choices=[('UNFINISHED', 'Unfinished'), ('READY', 'Ready')], default='UNFINISHED', max_length=20)),
                ('lease_term_months', models.PositiveIntegerField(blank=True, null=True)),
                ('incentive_months', models.PositiveIntegerField(blank=True, null=True)),
                ('early_access_months', models.PositiveIntegerField(blank=True, null=True)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('price_calc_option', models.CharField(blank=True, choices=[('OPTION_ONE', 'Lease / (lease + incentive + early access)'), ('OPTION_TWO', '(Lease - incentive - early access) / lease')], max_length=20, null=True)),
                ('warehouse_sqm', models.FloatField(blank=True, null=True)),
                ('warehouse_rent_price', models.FloatField(blank=True, null=True)),
                ('office_sqm', models.FloatField(blank=True, null=True)),
                ('office_rent_price', models.FloatField(blank=True, null=True)),
                ('sanitary_sqm', models.FloatField(blank=True, null=True)),
                ('sanitary_rent_price', models.FloatField(blank=True, null=True)),
                ('others_sqm', models.FloatField(blank=True, null=True)),
                ('others_rent_price', models.FloatField(blank=True, null=True)),
                ('service_charge', models.FloatField(blank=True, null=True)),
                ('service_charge_type', models.CharField(blank=True, max_length=50)),
                ('docks', models.PositiveIntegerField(blank=True, null=True)),
                ('driveins', models.PositiveIntegerField(blank=True, null=True)),
                ('cross_dock', models.BooleanField(default=False)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('latitude', models.FloatField(blank=True, null=True)),
                ('longitude', models.FloatField(blank=True, null=True)),
                ('description', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('building', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='offer_groups', to='properties.building')),
                ('offer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='groups', to='offers.offer')),
            ],
            options={
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='GroupItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('unit_name', models.CharField(max_length=100)),
                ('warehouse_sqm', models.FloatField(blank=True, null=True)),
                ('offer_group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='group_items', to='offers.offergroup')),
                ('unit', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='group_items', to='properties.unit')),
            ],
            options={
                'ordering': ['pk'],
            },
        ),
    ]
