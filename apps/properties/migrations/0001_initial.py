import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('contacts', '0001_initial'),
        ('core', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Location',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='City or logistics hub (e.g. Chiajna)', max_length=120)),
                ('county', models.CharField(help_text='County (e.g. Ilfov)', max_length=120)),
            ],
            options={
                'ordering': ['name'],
                'unique_together': {('name', 'county')},
            },
        ),
        migrations.CreateModel(
            name='Building',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('property_code', models.CharField(blank=True, db_index=True, max_length=50)),
                ('transaction_type', models.CharField(choices=[('RENT', 'Rent'), ('SALE', 'Sale')], default='RENT', max_length=10)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('latitude', models.FloatField(blank=True, null=True)),
                ('longitude', models.FloatField(blank=True, null=True)),
                ('total_sqm', models.FloatField(blank=True, null=True)),
                ('available_sqm', models.FloatField(blank=True, null=True)),
                ('service_charge', models.FloatField(blank=True, help_text='EUR/sqm/month', null=True)),
                ('available_from', models.DateField(blank=True, null=True)),
                ('min_contract_years', models.PositiveIntegerField(blank=True, null=True)),
                ('description', models.TextField(blank=True)),
                ('clear_height', models.FloatField(blank=True, help_text='Meters', null=True)),
                ('floor_loading', models.FloatField(blank=True, help_text='t/sqm', null=True)),
                ('sprinkler', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('agency', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='buildings', to='core.agency')),
                ('developer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='developed_buildings', to='contacts.company')),
                ('location', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='buildings', to='properties.location')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='buildings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['agency', 'transaction_type'], name='building_agency_type_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Unit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('transaction_type', models.CharField(choices=[('RENT', 'Rent'), ('SALE', 'Sale')], default='RENT', max_length=10)),
                ('warehouse_sqm', models.FloatField(blank=True, null=True)),
                ('warehouse_rent_price', models.FloatField(blank=True, null=True)),
                ('office_sqm', models.FloatField(blank=True, null=True)),
                ('office_rent_price', models.FloatField(blank=True, null=True)),
                ('sanitary_sqm', models.FloatField(blank=True, null=True)),
                ('sanitary_rent_price', models.FloatField(blank=True, null=True)),
                ('others_sqm', models.FloatField(blank=True, null=True)),
                ('others_rent_price', models.FloatField(blank=True, null=True)),
                ('docks', models.PositiveIntegerField(blank=True, null=True)),
                ('driveins', models.PositiveIntegerField(blank=True, null=True)),
                ('cross_dock', models.BooleanField(default=False)),
                ('useful_height', models.FloatField(blank=True, null=True)),
                ('service_charge', models.FloatField(blank=True, null=True)),
                ('available_from', models.DateField(blank=True, null=True)),
                ('sale_price', models.FloatField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('building', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='units', to='properties.building')),
            ],
            options={
                'ordering': ['building', 'name'],
            },
        ),
    ]
