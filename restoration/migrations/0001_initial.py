from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import restoration.models.basemodel


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('uuid', models.CharField(default=restoration.models.basemodel.generate_uuid, editable=False, max_length=36, unique=True)),
                ('name', models.CharField(max_length=255)),
                ('total_hectares_restored_goal', models.FloatField(blank=True, help_text='Hectares the project commits to restore across all sites', null=True)),
            ],
            options={
                'db_table': 'restoration_projects',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='PolygonGeometry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('uuid', models.CharField(default=restoration.models.basemodel.generate_uuid, editable=False, max_length=36, unique=True)),
                ('geom', models.JSONField(help_text='GeoJSON Polygon or MultiPolygon geometry')),
            ],
            options={
                'db_table': 'restoration_polygon_geometries',
            },
        ),
        migrations.CreateModel(
            name='Site',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('uuid', models.CharField(default=restoration.models.basemodel.generate_uuid, editable=False, max_length=36, unique=True)),
                ('name', models.CharField(max_length=255)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('hectares_to_restore_goal', models.FloatField(blank=True, null=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sites', to='restoration.project')),
            ],
            options={
                'db_table': 'restoration_sites',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='SitePolygon',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('uuid', models.CharField(default=restoration.models.basemodel.generate_uuid, editable=False, max_length=36, unique=True)),
                ('polygon_uuid', models.CharField(db_index=True, help_text='UUID of the PolygonGeometry', max_length=36)),
                ('poly_name', models.CharField(blank=True, max_length=255, null=True)),
                ('practice', models.JSONField(blank=True, null=True)),
                ('target_sys', models.CharField(blank=True, max_length=255, null=True)),
                ('distr', models.JSONField(blank=True, null=True)),
                ('num_trees', models.IntegerField(blank=True, null=True)),
                ('plant_start', models.DateField(blank=True, null=True)),
                ('calc_area', models.FloatField(blank=True, help_text='Area in hectares', null=True)),
                ('status', models.CharField(choices=[('draft', 'Draft'), ('submitted', 'Submitted'), ('needs-more-information', 'Needs More Information'), ('approved', 'Approved')], default='draft', max_length=50)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('site', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='site_polygons', to='restoration.site')),
            ],
            options={
                'db_table': 'restoration_site_polygons',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['site', 'is_active'], name='site_polygon_site_active_idx')],
            },
        ),
        migrations.CreateModel(
            name='CriteriaSite',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('polygon_uuid', models.CharField(db_index=True, max_length=36)),
                ('criteria_id', models.PositiveSmallIntegerField()),
                ('valid', models.BooleanField()),
                ('extra_info', models.JSONField(blank=True, null=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'restoration_criteria_site',
                'ordering': ['-created_at', '-id'],
                'constraints': [models.UniqueConstraint(fields=('polygon_uuid', 'criteria_id'), name='unique_current_criteria_per_polygon')],
            },
        ),
        migrations.CreateModel(
            name='CriteriaSiteHistoric',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('polygon_uuid', models.CharField(db_index=True, max_length=36)),
                ('criteria_id', models.PositiveSmallIntegerField()),
                ('valid', models.BooleanField()),
                ('extra_info', models.JSONField(blank=True, null=True)),
                ('created_at', models.DateTimeField()),
                ('superseded_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'restoration_criteria_site_historic',
                'ordering': ['-superseded_at', '-id'],
                'indexes': [models.Index(fields=['polygon_uuid', 'criteria_id'], name='criteria_hist_poly_crit_idx')],
            },
        ),
        migrations.CreateModel(
            name='DelayedJob',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('uuid', models.CharField(default=restoration.models.basemodel.generate_uuid, editable=False, max_length=36, unique=True)),
                ('name', models.CharField(blank=True, max_length=255, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('running', 'Running'), ('succeeded', 'Succeeded'), ('failed', 'Failed')], db_index=True, default='pending', max_length=20)),
                ('status_code', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('total_content', models.PositiveIntegerField(blank=True, null=True)),
                ('processed_content', models.PositiveIntegerField(blank=True, null=True)),
                ('progress_message', models.CharField(blank=True, max_length=500, null=True)),
                ('payload', models.JSONField(blank=True, null=True)),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('is_acknowledged', models.BooleanField(default=False)),
            ],
            options={
                'db_table': 'restoration_delayed_jobs',
                'ordering': ['-created_at'],
            },
        ),
    ]
