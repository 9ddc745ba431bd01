# database/models.py
"""
Read-only ORM mappings for the externally managed DFDA tables.

Only the columns this service reads are mapped. Count columns are BIGINT in
the source schema.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

# Important: must match Base from db_setup.py
from .db_setup import Base


class VariableCategory(Base):
    """Grouping of variables (e.g. "Emotions", "Foods")."""
    __tablename__ = "variable_categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(64), nullable=False, index=True)
    boring = Column(Boolean, nullable=False, default=False)
    image_url = Column(String(2083), nullable=True)
    number_of_variables = Column(BigInteger, nullable=True)
    number_of_user_variables = Column(BigInteger, nullable=True)
    number_of_measurements = Column(BigInteger, nullable=True)
    deleted_at = Column(DateTime, nullable=True)

    variables = relationship("Variable", back_populates="category")

    def __repr__(self):
        return f"<VariableCategory(id={self.id}, name={self.name}, boring={self.boring})>"


class Unit(Base):
    __tablename__ = "units"

    id = Column(Integer, primary_key=True)
    name = Column(String(64), nullable=False)
    abbreviated_name = Column(String(16), nullable=True)

    def __repr__(self):
        return f"<Unit(id={self.id}, name={self.name})>"


class Variable(Base):
    """A trackable quantity (symptom, food, treatment, measurement type)."""
    __tablename__ = "variables"

    id = Column(Integer, primary_key=True)
    name = Column(String(125), nullable=False, index=True)
    description = Column(Text, nullable=True)
    variable_category_id = Column(Integer, ForeignKey("variable_categories.id"), nullable=False, index=True)
    default_unit_id = Column(Integer, ForeignKey("units.id"), nullable=True)
    is_public = Column(Boolean, nullable=True)
    image_url = Column(String(2083), nullable=True)
    number_of_user_variables = Column(BigInteger, nullable=True)
    number_of_measurements = Column(BigInteger, nullable=True)
    number_of_raw_measurements_with_tags_joins_children = Column(BigInteger, nullable=True)
    number_of_aggregate_correlations_as_cause = Column(BigInteger, nullable=True)
    number_of_aggregate_correlations_as_effect = Column(BigInteger, nullable=True)
    deleted_at = Column(DateTime, nullable=True)

    category = relationship("VariableCategory", back_populates="variables")
    unit = relationship("Unit")

    def __repr__(self):
        return f"<Variable(id={self.id}, name={self.name}, category_id={self.variable_category_id})>"


class AggregateCorrelation(Base):
    """Precomputed population-level relationship between two variables."""
    __tablename__ = "aggregate_correlations"

    id = Column(Integer, primary_key=True)
    cause_variable_id = Column(Integer, ForeignKey("variables.id"), nullable=False, index=True)
    effect_variable_id = Column(Integer, ForeignKey("variables.id"), nullable=False, index=True)
    forward_pearson_correlation_coefficient = Column(Float, nullable=True)
    aggregate_qm_score = Column(Float, nullable=True)
    number_of_users = Column(BigInteger, nullable=True)
    is_public = Column(Boolean, nullable=True)
    deleted_at = Column(DateTime, nullable=True)

    cause_variable = relationship("Variable", foreign_keys=[cause_variable_id])
    effect_variable = relationship("Variable", foreign_keys=[effect_variable_id])

    def __repr__(self):
        return (
            f"<AggregateCorrelation(id={self.id}, cause={self.cause_variable_id}, "
            f"effect={self.effect_variable_id})>"
        )
