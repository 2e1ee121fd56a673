# Generated for identifier allocation (sequence counters + issued identifier ledger)

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='SequenceCounter',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('category', models.CharField(help_text='e.g. a (student), c (coach), EVT (event)', max_length=4)),
                ('region', models.CharField(help_text='Two-letter state code, e.g. DL', max_length=2)),
                ('sport', models.CharField(blank=True, default='', help_text='Sport code for event partitions, empty otherwise', max_length=2)),
                ('month', models.PositiveSmallIntegerField()),
                ('year', models.PositiveSmallIntegerField()),
                ('last_value', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Sequence Counter',
                'verbose_name_plural': 'Sequence Counters',
                'ordering': ['-year', '-month', 'category', 'region', 'sport'],
                'constraints': [models.UniqueConstraint(fields=('category', 'region', 'sport', 'month', 'year'), name='unique_sequence_partition')],
            },
        ),
        migrations.CreateModel(
            name='IssuedIdentifier',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('identifier', models.CharField(max_length=32, unique=True)),
                ('category', models.CharField(max_length=4)),
                ('region', models.CharField(max_length=2)),
                ('sport', models.CharField(blank=True, default='', max_length=2)),
                ('month', models.PositiveSmallIntegerField()),
                ('year', models.PositiveSmallIntegerField()),
                ('sequence', models.PositiveIntegerField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Issued Identifier',
                'verbose_name_plural': 'Issued Identifiers',
                'ordering': ['-created_at'],
                'constraints': [models.UniqueConstraint(fields=('category', 'region', 'sport', 'month', 'year', 'sequence'), name='unique_issued_sequence')],
            },
        ),
    ]
