def snake_to_camel(field: str) -> str:
    head, *tail = field.split('_')
    return head + ''.join(part.title() for part in tail)
