"""
RangeQuery — Модель запроса суммы на отрезке

Immutable Pydantic модель отрезка [start, end] (0-based, включительно).
Предназначена для валидации недоверенного ввода ДО обращения к индексу:
ошибки здесь восстановимые (ValidationError), в отличие от
RangeContractViolation при прямом вызове query().
"""

from pydantic import BaseModel, Field, field_validator

from rangesum.core.math.numerical_safeguards import validate_index


class RangeQuery(BaseModel):
    """
    Отрезок для range-sum запроса.

    Immutable модель (frozen=True). Отрицательные индексы и отрезки
    с end < start не поддерживаются.
    """

    start: int = Field(..., ge=0, description="Начало отрезка (включительно)")
    end: int = Field(..., ge=0, description="Конец отрезка (включительно)")

    model_config = {"frozen": True, "strict": True}

    @field_validator("end")
    @classmethod
    def validate_end_not_before_start(cls, v: int, info) -> int:
        """Проверка, что end >= start"""
        if "start" in info.data:
            start = info.data["start"]
            if v < start:
                raise ValueError(f"end {v} must be >= start {start}")
        return v

    @property
    def width(self) -> int:
        """Количество элементов в отрезке"""
        return self.end - self.start + 1

    @classmethod
    def within(cls, length: int, start: int, end: int) -> "RangeQuery":
        """
        Создание запроса с проверкой границ относительно длины последовательности.

        Args:
            length: Длина последовательности
            start: Начало отрезка
            end: Конец отрезка

        Returns:
            Валидный RangeQuery

        Raises:
            ValidationError: Если индексы отрицательные или end < start
            ValueError: Если end >= length (validate_index)
        """
        request = cls(start=start, end=end)
        validate_index(request.end, "end", length)
        return request
