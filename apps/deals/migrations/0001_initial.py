import django.db.models.deletion
import django.utils.timezone
import taggit.managers
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('contacts', '0001_initial'),
        ('core', '0001_initial'),
        ('properties', '0001_initial'),
        ('taggit', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PropertyRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('request_type', models.CharField(blank=True, choices=[('RENT', 'Rent'), ('SALE', 'Sale')], max_length=10, null=True)),
                ('number_of_sqm', models.FloatField(blank=True, null=True)),
                ('min_height', models.FloatField(blank=True, null=True)),
                ('estimated_fee_value', models.FloatField(blank=True, help_text='Expected brokerage fee (EUR)', null=True)),
                ('contract_period', models.PositiveIntegerField(blank=True, help_text='Months', null=True)),
                ('break_option_after', models.PositiveIntegerField(blank=True, help_text='Months', null=True)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('NEW', 'New'), ('OFFERING', 'Offering'), ('TOUR', 'Tour'), ('SHORTLIST', 'Shortlist'), ('NEGOTIATION', 'Negotiation'), ('HOT_SIGNED', 'Hot Signed'), ('ON_HOLD', 'On Hold'), ('WON', 'Won'), ('LOST', 'Lost')], db_index=True, default='NEW', max_length=20)),
                ('lost_reason', models.TextField(blank=True)),
                ('hold_reason', models.TextField(blank=True)),
                ('last_status_change', models.DateTimeField(blank=True, null=True)),
                ('closed_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('agreed_price', models.FloatField(blank=True, null=True)),
                ('actual_fee', models.FloatField(blank=True, null=True)),
                ('signed_date', models.DateField(blank=True, null=True)),
                ('contract_start_date', models.DateField(blank=True, null=True)),
                ('contract_end_date', models.DateField(blank=True, null=True)),
                ('won_unit_ids', models.JSONField(blank=True, default=list)),
                ('closure_notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('agency', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='requests', to='core.agency')),
                ('company', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='requests', to='contacts.company')),
                ('locations', models.ManyToManyField(blank=True, related_name='requests', to='properties.location')),
                ('person', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='requests', to='contacts.person')),
                ('tags', taggit.managers.TaggableManager(blank=True, help_text='A comma-separated list of tags.', through='taggit.TaggedItem', to='taggit.Tag', verbose_name='Tags')),
                ('user', models.ForeignKey(help_text='Broker responsible for the deal', on_delete=django.db.models.deletion.PROTECT, related_name='requests', to=settings.AUTH_USER_MODEL)),
                ('won_building', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='won_requests', to='properties.building')),
            ],
            options={
                'verbose_name': 'Property Request',
                'verbose_name_plural': 'Property Requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['agency', 'status'], name='request_agency_status_idx'),
                    models.Index(fields=['user', 'status'], name='request_user_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Activity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('activity_type', models.CharField(choices=[('CALL', 'Call'), ('EMAIL', 'Email'), ('MEETING', 'Meeting'), ('TOUR', 'Tour'), ('NOTE', 'Note'), ('TASK', 'Task')], default='NOTE', max_length=20)),
                ('title', models.CharField(max_length=255)),
                ('date', models.DateField(default=django.utils.timezone.localdate)),
                ('time', models.TimeField(blank=True, null=True)),
                ('duration', models.PositiveIntegerField(blank=True, help_text='Minutes', null=True)),
                ('done', models.BooleanField(default=False)),
                ('is_system', models.BooleanField(default=False, help_text='Generated by the CRM, not by a broker')),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activities', to='contacts.company')),
                ('persons', models.ManyToManyField(blank=True, related_name='activities', to='contacts.person')),
                ('request', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='activities', to='deals.propertyrequest')),
                ('user', models.ForeignKey(blank=True, help_text='Who performed (or owns) this activity', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activities', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Activity',
                'verbose_name_plural': 'Activities',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['request', '-created_at'], name='activity_request_created_idx'),
                    models.Index(fields=['user', 'done'], name='activity_user_done_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Tenant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('start_date', models.DateField()),
                ('end_date', models.DateField(db_index=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='leases', to='contacts.company')),
                ('deal', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tenants', to='deals.propertyrequest')),
                ('unit', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tenants', to='properties.unit')),
            ],
            options={
                'ordering': ['end_date'],
            },
        ),
    ]
