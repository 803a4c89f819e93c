from monitoring.models import Department


def list_departments():
    return [
        {
            "id": department.id,
            "name": department.name,
            "description": department.description,
        }
        for department in Department.objects.all()
    ]
