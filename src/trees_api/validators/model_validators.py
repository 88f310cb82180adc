from sqlalchemy import select, and_, inspect as sa_inspect, UniqueConstraint


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return list of unknown kwarg keys that are not part of the model's mapped attributes.
    - model: the SQLAlchemy model class (not instance)
    - kwargs: dict of incoming kwargs to validate
    """
    mapper = sa_inspect(model)
    # mapper.attrs includes columns and relationships; attr.key is the name callers use
    allowed = {attr.key for attr in mapper.attrs}
    return [k for k in kwargs.keys() if k not in allowed]


def get_required_attributes(model) -> dict[str, str]:
    """
    Attributes whose column is NOT NULL, has no client/server default and is not an auto PK.

    Returns a mapping of Python attribute key -> database column name, e.g.
    {"height_ft": "heightFt"} for Tree. The column name is what error messages show.
    """
    required = {}
    for attr in sa_inspect(model).column_attrs:
        col = attr.columns[0]
        has_default = col.default is not None or col.server_default is not None
        is_auto_pk = col.primary_key and col.autoincrement in (True, "auto")
        if not col.nullable and not has_default and not is_auto_pk:
            required[attr.key] = col.name
    return required


def find_missing_required(model, kwargs: dict) -> list[str]:
    """
    Column names of required attributes that are absent from kwargs or explicitly None.
    """
    return [
        column
        for key, column in get_required_attributes(model).items()
        if kwargs.get(key) is None
    ]


def get_unique_attribute_sets(model) -> list[list[str]]:
    """
    Return unique attribute sets (by Python attribute key). Covers Column(unique=True)
    and table-level UniqueConstraint objects.
    """
    column_to_key = {attr.columns[0].name: attr.key for attr in sa_inspect(model).column_attrs}
    unique_sets = []

    for col in model.__table__.columns:
        if col.unique:
            unique_sets.append([column_to_key[col.name]])

    for constraint in model.__table__.constraints:
        if isinstance(constraint, UniqueConstraint):
            unique_sets.append([column_to_key[c.name] for c in constraint.columns])

    return unique_sets


async def find_unique_conflicts(db, model, kwargs: dict) -> set[str]:
    """
    Run pre-insert queries to detect existing rows that would violate unique constraints.
    Returns the set of attribute keys that conflict (best-effort).
    """
    conflicts = set()

    for keys in get_unique_attribute_sets(model):
        if not all(k in kwargs for k in keys):
            continue

        conditions = [getattr(model, k) == kwargs[k] for k in keys]
        result = await db.execute(select(model).where(and_(*conditions)).limit(1))
        if result.scalars().first() is not None:
            conflicts.update(keys)

    return conflicts
