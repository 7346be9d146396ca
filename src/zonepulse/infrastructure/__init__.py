"""Infrastructure: backing store engine, schema, migrations, repositories."""
