"""Base component class for table-like components."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

import polars as pl

from .columns import ColumnDescriptor, ColumnLike, columns_from_records, columns_from_schema, normalize_columns
from .records import RecordsLike, to_records

if TYPE_CHECKING:
    from .state import StateManager


class BaseComponent(ABC):
    """
    Abstract base class for components rendering in-memory records.

    Attributes:
        _component_id: Unique identifier of this component instance
        _records: Normalized record sequence
        _columns: Column descriptors
        _config: Extra configuration passed through to the presentation layer
    """

    def __init__(
        self,
        component_id: str,
        data: RecordsLike,
        columns: Optional[Sequence[ColumnLike]] = None,
        **kwargs,
    ):
        """
        Initialize the component.

        Args:
            component_id: Unique identifier for this component. Used as the
                key under which view state is stored between reruns.
            data: Records as a sequence, polars DataFrame/LazyFrame or
                pandas DataFrame.
            columns: Column descriptors or dicts. If None, columns are
                auto-generated from the polars schema or the first record.
            **kwargs: Component-specific configuration options
        """
        self._component_id = component_id
        self._config: Dict[str, Any] = kwargs
        self._records = to_records(data)
        self._columns = self._resolve_columns(data, columns)

    def _resolve_columns(
        self, data: RecordsLike, columns: Optional[Sequence[ColumnLike]]
    ) -> List[ColumnDescriptor]:
        if columns is not None:
            return normalize_columns(columns)
        if isinstance(data, pl.LazyFrame):
            return columns_from_schema(data.collect_schema())
        if isinstance(data, pl.DataFrame):
            return columns_from_schema(data.schema)
        return columns_from_records(self._records)

    @property
    def component_id(self) -> str:
        return self._component_id

    @property
    def records(self) -> Sequence:
        return self._records

    @property
    def columns(self) -> List[ColumnDescriptor]:
        return list(self._columns)

    def get_column(self, key: str) -> Optional[ColumnDescriptor]:
        """Return the column with the given key, or None."""
        for column in self._columns:
            if column.key == key:
                return column
        return None

    @abstractmethod
    def _get_component_name(self) -> str:
        """Return the presentation component name (e.g., 'DataTable')."""
        pass

    @abstractmethod
    def _prepare_view_data(self, view_state: Any) -> Dict[str, Any]:
        """
        Prepare the data payload for the presentation layer.

        Args:
            view_state: Current view parameters

        Returns:
            Dict with data to render
        """
        pass

    @abstractmethod
    def _get_component_args(self) -> Dict[str, Any]:
        """
        Get component arguments for the presentation layer.

        Returns:
            Dict with component configuration
        """
        pass

    def __call__(
        self,
        key: Optional[str] = None,
        state_manager: Optional["StateManager"] = None,
    ) -> Any:
        """
        Render the component in Streamlit.

        Args:
            key: Optional unique key (defaults to the component id)
            state_manager: Optional StateManager holding view state between
                reruns. If not provided, uses a default shared StateManager.

        Returns:
            The result returned by the renderer
        """
        from ..rendering.bridge import render_component
        from .state import get_default_state_manager

        if state_manager is None:
            state_manager = get_default_state_manager()

        return render_component(component=self, state_manager=state_manager, key=key)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"component_id='{self._component_id}', "
            f"rows={len(self._records)}, "
            f"columns={[column.key for column in self._columns]}, "
            f"config={self._config})"
        )
