"""Unit tests for AnnotationMetadataReader."""

import array
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, NamedTuple, Optional, Protocol

import pytest
from pydantic import BaseModel

from slik.application.metadata_reader import AnnotationMetadataReader, find_qualifier, is_protocol, split_annotated
from slik.domain import (
    IMetadataReader,
    Inject,
    Lifetime,
    Named,
    NotConstructibleError,
    TypeDescriptor,
    implemented_by,
    injectable,
    singleton,
)


class UnresolvableHint:
    def __init__(self, dependency: "DoesNotExist"):  # noqa: F821
        self.dependency = dependency


class TestHelpers:
    """Test cases for the Annotated helpers."""

    def test_split_annotated(self):
        """Test that Annotated hints are split into type and markers."""
        hint, markers = split_annotated(Annotated[str, Named("greeting")])

        assert hint is str
        assert markers == (Named("greeting"),)

    def test_split_plain_hint(self):
        """Test that plain hints have no markers."""
        assert split_annotated(int) == (int, ())

    def test_find_qualifier(self):
        """Test that the first Named marker wins."""
        assert find_qualifier((Inject(), Named("a"), Named("b"))) == "a"
        assert find_qualifier((Inject(),)) is None

    def test_is_protocol(self):
        """Test that only protocol classes themselves count as protocols."""

        class Greeter(Protocol):
            def greet(self) -> str: ...

        class EnglishGreeter(Greeter):
            def greet(self) -> str:
                return "hello"

        assert is_protocol(Greeter) is True
        assert is_protocol(EnglishGreeter) is False
        assert is_protocol(Optional[int]) is False


class TestClassShape:
    """Test cases for is_constructible_class_shape."""

    def test_reader_implements_interface(self):
        """Test that the reader implements IMetadataReader."""
        assert isinstance(AnnotationMetadataReader(), IMetadataReader)

    def test_plain_class_is_valid(self):
        """Test that a regular class is accepted."""

        class Service:
            pass

        assert AnnotationMetadataReader().is_constructible_class_shape(Service) is True

    def test_builtin_scalar_is_valid(self):
        """Test that str is a plain class shape."""
        assert AnnotationMetadataReader().is_constructible_class_shape(str) is True

    def test_dataclass_is_invalid(self):
        """Test that dataclasses are rejected."""

        @dataclass
        class Point:
            x: int

        assert AnnotationMetadataReader().is_constructible_class_shape(Point) is False

    def test_named_tuple_is_invalid(self):
        """Test that NamedTuples are rejected."""

        class Point(NamedTuple):
            x: int

        assert AnnotationMetadataReader().is_constructible_class_shape(Point) is False

    def test_enum_is_invalid(self):
        """Test that enums are rejected."""

        class Color(Enum):
            RED = 1

        assert AnnotationMetadataReader().is_constructible_class_shape(Color) is False

    def test_pydantic_model_is_invalid(self):
        """Test that pydantic models are rejected as record types."""

        class Settings(BaseModel):
            debug: bool = False

        assert AnnotationMetadataReader().is_constructible_class_shape(Settings) is False

    def test_markers_are_invalid(self):
        """Test that marker classes are rejected."""
        reader = AnnotationMetadataReader()

        assert reader.is_constructible_class_shape(Named) is False
        assert reader.is_constructible_class_shape(Inject) is False

    @pytest.mark.parametrize("cls", [list, tuple, set, frozenset, dict, bytearray, array.array])
    def test_collections_are_invalid(self, cls):
        """Test that builtin collection types are rejected."""
        assert AnnotationMetadataReader().is_constructible_class_shape(cls) is False

    def test_non_classes_are_invalid(self):
        """Test that type expressions that are not classes are rejected."""
        reader = AnnotationMetadataReader()

        assert reader.is_constructible_class_shape(list[int]) is False
        assert reader.is_constructible_class_shape(Optional[int]) is False
        assert reader.is_constructible_class_shape("Service") is False


class TestAbstract:
    """Test cases for is_abstract."""

    def test_abstract_class(self):
        """Test that classes with abstract methods are abstract."""

        class Repository(ABC):
            @abstractmethod
            def find(self):
                pass

        assert AnnotationMetadataReader().is_abstract(Repository) is True

    def test_abc_without_abstract_methods(self):
        """Test that an instantiable ABC subclass is concrete."""

        class Service(ABC):
            def run(self):
                return 1

        assert AnnotationMetadataReader().is_abstract(Service) is False

    def test_protocol(self):
        """Test that protocols are abstract."""

        class Greeter(Protocol):
            def greet(self) -> str: ...

        assert AnnotationMetadataReader().is_abstract(Greeter) is True

    def test_concrete_subclass(self):
        """Test that implementations of an ABC are concrete."""

        class Repository(ABC):
            @abstractmethod
            def find(self):
                pass

        class SqlRepository(Repository):
            def find(self):
                return None

        assert AnnotationMetadataReader().is_abstract(SqlRepository) is False

    def test_plain_class(self):
        """Test that plain classes are concrete."""

        class Service:
            pass

        assert AnnotationMetadataReader().is_abstract(Service) is False


class TestMarkersAndRegistration:
    """Test cases for marker lookups and explicit registration."""

    def test_decorated_markers(self):
        """Test that decorator markers are reported."""

        @singleton
        @injectable
        class Service:
            pass

        reader = AnnotationMetadataReader()
        assert reader.is_injectable(Service) is True
        assert reader.is_singleton(Service) is True

    def test_undecorated_class(self):
        """Test that plain classes carry no markers."""

        class Service:
            pass

        reader = AnnotationMetadataReader()
        assert reader.is_injectable(Service) is False
        assert reader.is_singleton(Service) is False
        assert reader.default_implementation(Service) is None

    def test_subclass_does_not_inherit_injectable(self):
        """Test that markers of a base class do not apply to subclasses."""

        @injectable
        class Base:
            pass

        class Child(Base):
            pass

        assert AnnotationMetadataReader().is_injectable(Child) is False

    def test_default_implementation(self):
        """Test that @implemented_by is reported."""

        class Impl:
            pass

        @implemented_by(Impl)
        class Repository(ABC):
            pass

        assert AnnotationMetadataReader().default_implementation(Repository) is Impl

    def test_register_undecorated_class(self):
        """Test that explicit registration marks classes that cannot be decorated."""
        reader = AnnotationMetadataReader()
        result = reader.register(str, TypeDescriptor(injectable=True, lifetime=Lifetime.SINGLETON))

        assert result is reader
        assert reader.is_injectable(str) is True
        assert reader.is_singleton(str) is True

    def test_registration_wins_over_decorator(self):
        """Test that a registered descriptor overrides class markers."""

        @injectable
        class Service:
            pass

        reader = AnnotationMetadataReader()
        reader.register(Service, TypeDescriptor(injectable=False))

        assert reader.is_injectable(Service) is False

    def test_registrations_are_per_reader(self):
        """Test that registrations do not leak between readers."""
        AnnotationMetadataReader().register(int, TypeDescriptor(injectable=True))

        assert AnnotationMetadataReader().is_injectable(int) is False


class TestConstructorParameters:
    """Test cases for constructor_parameters."""

    def test_no_constructor(self):
        """Test that classes without __init__ have no parameters."""

        class Service:
            pass

        assert AnnotationMetadataReader().constructor_parameters(Service) == []

    def test_ordered_parameters(self):
        """Test that parameters are reported in declaration order."""

        class Database:
            pass

        class Cache:
            pass

        class Service:
            def __init__(self, db: Database, cache: Cache):
                self.db = db
                self.cache = cache

        parameters = AnnotationMetadataReader().constructor_parameters(Service)

        assert [p.name for p in parameters] == ["db", "cache"]
        assert [p.dependency_type for p in parameters] == [Database, Cache]
        assert all(p.qualifier is None for p in parameters)

    def test_named_parameter(self):
        """Test that Named markers become qualifiers."""

        class Greeter:
            def __init__(self, message: Annotated[str, Named("greeting")]):
                self.message = message

        (parameter,) = AnnotationMetadataReader().constructor_parameters(Greeter)

        assert parameter.dependency_type is str
        assert parameter.qualifier == "greeting"

    def test_skips_defaults_and_var_args(self):
        """Test that defaulted and variadic parameters are left out."""

        class Database:
            pass

        class Service:
            def __init__(self, db: Database, retries: int = 3, *args, **kwargs):
                self.db = db

        parameters = AnnotationMetadataReader().constructor_parameters(Service)

        assert [p.name for p in parameters] == ["db"]

    def test_positional_only(self):
        """Test that positional-only parameters are flagged."""

        class Database:
            pass

        class Service:
            def __init__(self, db: Database, /):
                self.db = db

        (parameter,) = AnnotationMetadataReader().constructor_parameters(Service)

        assert parameter.positional_only is True

    def test_missing_type_hint(self):
        """Test that a required parameter without hint is not constructible."""

        class Service:
            def __init__(self, dependency):
                self.dependency = dependency

        with pytest.raises(NotConstructibleError) as exc_info:
            AnnotationMetadataReader().constructor_parameters(Service)

        assert "dependency" in str(exc_info.value)
        assert "lacks type hint" in str(exc_info.value)

    def test_unresolvable_type_hint(self):
        """Test that hints that cannot be evaluated are not constructible."""
        with pytest.raises(NotConstructibleError) as exc_info:
            AnnotationMetadataReader().constructor_parameters(UnresolvableHint)

        assert "UnresolvableHint" in str(exc_info.value)


class TestInjectableFields:
    """Test cases for injectable_fields."""

    def test_marked_fields_only(self):
        """Test that only fields with an Inject marker are reported."""

        class Database:
            pass

        class Application:
            db: Annotated[Database, Inject()]
            banner: Annotated[str, Inject(), Named("banner")]
            plain: int
            named_only: Annotated[str, Named("ignored")]

        fields = AnnotationMetadataReader().injectable_fields(Application)

        assert [(f.name, f.dependency_type, f.qualifier) for f in fields] == [
            ("db", Database, None),
            ("banner", str, "banner"),
        ]

    def test_inject_class_as_marker(self):
        """Test that the Inject class itself is accepted as marker."""

        class Database:
            pass

        class Application:
            db: Annotated[Database, Inject]

        (field,) = AnnotationMetadataReader().injectable_fields(Application)

        assert field.name == "db"

    def test_declared_fields_only(self):
        """Test that inherited fields are not reported."""

        class Database:
            pass

        class Cache:
            pass

        class Base:
            db: Annotated[Database, Inject()]

        class Child(Base):
            cache: Annotated[Cache, Inject()]

        reader = AnnotationMetadataReader()

        assert [f.name for f in reader.injectable_fields(Child)] == ["cache"]
        assert [f.name for f in reader.injectable_fields(Base)] == ["db"]

    def test_no_annotations(self):
        """Test that classes without annotations have no fields."""

        class Application:
            pass

        assert AnnotationMetadataReader().injectable_fields(Application) == []
