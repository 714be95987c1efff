from peewee import BooleanField, CharField, DateTimeField, Model, TextField
from infrastructure.peewee.session.db import db

class TaskModel(Model):
    id = CharField(primary_key=True, max_length=36)
    owner_id = CharField(index=True)
    title = CharField()
    description = TextField(null=True)
    deadline = DateTimeField(null=True)
    priority = CharField(default="medium")
    category = CharField(null=True)
    completed = BooleanField(default=False)
    created_at = DateTimeField()
    updated_at = DateTimeField()

    class Meta:
        database = db
        table_name = "tasks"
