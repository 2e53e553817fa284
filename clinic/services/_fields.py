"""Copy camelCase serializer output onto model attributes."""


def assign(obj, data: dict, mapping: dict) -> list[str]:
    changed = []
    for key, attr in mapping.items():
        if key in data:
            value = data[key]
            if value is None and not obj._meta.get_field(attr).null:
                value = ''
            setattr(obj, attr, value)
            changed.append(attr)
    return changed
