import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Agency',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Brokerage agency name', max_length=200, unique=True)),
                ('slug', models.SlugField(help_text='URL-friendly name (auto-generated)', max_length=200, unique=True)),
                ('logo', models.ImageField(blank=True, help_text='Agency logo (used on offers)', null=True, upload_to='agencies/logos/')),
                ('phone', models.CharField(blank=True, help_text='Contact phone number', max_length=20)),
                ('email', models.EmailField(blank=True, help_text='Contact email', max_length=254)),
                ('website', models.URLField(blank=True, help_text='Agency website', validators=[django.core.validators.URLValidator()])),
                ('address', models.TextField(blank=True, help_text='Office address')),
                ('primary_color', models.CharField(default='#1E3A5F', help_text='Hex color used on offer documents', max_length=7)),
                ('status', models.CharField(choices=[('ACTIVE', 'Active'), ('SUSPENDED', 'Suspended')], db_index=True, default='ACTIVE', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Agency',
                'verbose_name_plural': 'Agencies',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['slug'], name='agency_slug_idx'),
                    models.Index(fields=['status'], name='agency_status_idx'),
                ],
            },
        ),
    ]
