import logging
from typing import Any, Optional, Type

from slik.application.metadata_reader import is_protocol
from slik.domain import FieldInjectionError, IContainer, IMetadataReader, SlikException, qualified_name

logger = logging.getLogger(__name__)


class FieldInjector:
    """Populates fields marked ``Annotated[T, Inject()]`` on existing objects.

    Meant for objects whose construction slik does not control. Only the fields
    declared on one class level are visited; a subclass that adds injectable
    fields must be injected level by level.
    """

    def __init__(self, metadata_reader: IMetadataReader) -> None:
        self._metadata_reader = metadata_reader

    def inject(self, instance: Any, container: IContainer, declaring_type: Optional[Type] = None) -> None:
        """Resolve every injectable field of ``declaring_type`` and assign it on ``instance``.

        Args:
            instance: The object to populate.
            container: The container to resolve field values from.
            declaring_type: The class level to read fields from; defaults to the
                instance's own class.

        Raises:
            FieldInjectionError: If a field cannot be resolved, or ``instance`` is
                not an instance of ``declaring_type``.

        Example:
            >>> class Application:
            ...     users: Annotated[UserService, Inject()]
            ...     banner: Annotated[str, Inject(), Named("banner")]
            >>>
            >>> app = Application()
            >>> FieldInjector(reader).inject(app, container)
        """
        instance_type = type(instance)
        cls = declaring_type or instance_type
        if not is_protocol(cls) and not isinstance(instance, cls):
            raise FieldInjectionError(instance_type, f"Instance is not a {qualified_name(cls)}.")

        try:
            for field in self._metadata_reader.injectable_fields(cls):
                value = container.resolve(field.dependency_type, field.qualifier)
                setattr(instance, field.name, value)
                logger.debug("Injected %s.%s", qualified_name(instance_type), field.name)
        except SlikException as e:
            raise FieldInjectionError(instance_type, str(e)) from e
