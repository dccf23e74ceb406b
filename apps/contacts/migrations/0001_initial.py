import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Company',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Legal name', max_length=200)),
                ('vat_number', models.CharField(blank=True, help_text='Fiscal code / VAT number', max_length=50)),
                ('j_number', models.CharField(blank=True, help_text='Trade register number', max_length=50)),
                ('iban', models.CharField(blank=True, max_length=50)),
                ('address', models.TextField(blank=True)),
                ('open_deals', models.PositiveIntegerField(default=0)),
                ('closed_deals', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('agency', models.ForeignKey(help_text='Agency that owns this contact', on_delete=django.db.models.deletion.CASCADE, related_name='companies', to='core.agency')),
                ('user', models.ForeignKey(blank=True, help_text='Broker who added this company', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='companies', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Company',
                'verbose_name_plural': 'Companies',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['agency', 'name'], name='company_agency_name_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Person',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('job_title', models.CharField(blank=True, max_length=100)),
                ('emails', models.JSONField(blank=True, default=list, help_text='List of e-mail addresses')),
                ('phones', models.JSONField(blank=True, default=list, help_text='List of phone numbers')),
                ('source', models.CharField(blank=True, help_text='Where the contact came from', max_length=100)),
                ('open_deals', models.PositiveIntegerField(default=0)),
                ('closed_deals', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('agency', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='persons', to='core.agency')),
                ('company', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='persons', to='contacts.company')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='persons', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Person',
                'verbose_name_plural': 'Persons',
                'ordering': ['name'],
            },
        ),
    ]
