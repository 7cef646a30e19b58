import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('category', models.CharField(blank=True, choices=[('hackathon', 'Hackathon'), ('competition', 'Competition'), ('research', 'Research'), ('symposium', 'Symposium')], max_length=32, null=True)),
                ('start_date', models.DateTimeField()),
                ('end_date', models.DateTimeField()),
                ('registration_deadline', models.DateTimeField(blank=True, null=True)),
                ('organizer', models.CharField(blank=True, help_text='Display name of the organizing body', max_length=255, null=True)),
                ('website', models.URLField(blank=True, null=True)),
                ('domain', models.CharField(blank=True, help_text='Only users with this email domain see the event (empty = everyone)', max_length=255, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='posted_events', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-start_date'],
                'indexes': [
                    models.Index(fields=['is_active', 'start_date'], name='event_active_start_idx'),
                    models.Index(fields=['domain'], name='event_domain_idx'),
                ],
            },
        ),
    ]
