"""Module for defining the settings of a parsing run.

Settings are declared as class attributes of a settings class and can be
overwritten by a config file, e.g.::

    [ParserSettings]
    item_kind = ItemKind.quantity_set
    skip_failed_documents = True
"""

import ast
import configparser
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from psetparser.utilities import types
from psetparser.utilities.types import ItemKind

logger = logging.getLogger(__name__)


class AutoSettingNameMeta(type):
    """Adds the name to every Setting attribute based on its instance name.

    This makes the definition of an extra attribute 'name' obsolete, as the
    attributes 'name' is automatic defined based on the instance name.
    """

    def __init__(cls, name, bases, namespace):
        super(AutoSettingNameMeta, cls).__init__(name, bases, namespace)
        for name, obj in namespace.items():
            if isinstance(obj, Setting):
                obj.name = name


class SettingsManager(dict):
    """Manages the different settings of a settings instance.

    Every bound settings instance gets its own copy of the declared settings,
    so changing a value does not affect other instances. This way you can
    call settings.<setting_name> and get the value directly while under
    settings.manager.<setting_name> you can still find all information.

    Args:
        bound_settings: instance of settings this manager is bound to.
    """

    def __init__(self, bound_settings):
        super().__init__()
        self.bound_settings = bound_settings
        self.defaults = {}
        self._create_settings()

    def _create_settings(self):
        """Add all listed settings from the settings class."""
        for name in self.names:
            setting = getattr(type(self.bound_settings), name)
            self[name] = setting.model_copy()
            self.defaults[name] = setting.value

    def reset_settings_to_defaults(self) -> None:
        for name, value in self.defaults.items():
            self[name].value = value

    @property
    def names(self):
        """Generator with the names of all settings of the bound class."""
        bound_settings_class = type(self.bound_settings)
        for attribute_name in dir(bound_settings_class):
            attribute = getattr(bound_settings_class, attribute_name)
            if isinstance(attribute, Setting):
                yield attribute_name


class Setting(BaseModel, validate_assignment=True, validate_default=True):
    value: None
    name: str = Field(default="set automatically")
    description: Optional[str] = None
    any_string: bool = Field(default=False)

    def __set__(self, bound_settings, value):
        bound_settings.manager[self.name].value = value

    def __get__(self, bound_settings, owner):
        if bound_settings is None:
            return self
        return bound_settings.manager[self.name].value


class ChoiceSetting(Setting):
    value: Union[str, List[str], Enum]
    choices: dict
    multiple_choice: bool = False

    def _check_for_value_in_choices(self, value):
        if value not in self.choices:
            if not self.any_string:
                raise PydanticCustomError(
                    "value_not_in_choices",
                    f'{value} is no valid value for setting {self.name}, '  # type: ignore[misc]
                    f'select one of {self.choices}.')

    @field_validator('choices', mode='after')
    @classmethod
    def check_setting_config(cls, choices):
        for choice in choices:
            # Check for string type, to exclude enums
            if isinstance(choice, str) and "." in choice:
                raise PydanticCustomError(
                    "illegal_character",
                    f"Provided setting {choice} contains character '.', "  # type: ignore[misc]
                    f"this is prohibited.")
        return choices

    @model_validator(mode='after')
    def check_content(self):
        if isinstance(self.value, list):
            if not self.multiple_choice:
                raise PydanticCustomError(
                    "one_choice_allowed",
                    f'Only one choice is allowed for setting {self.name}, '  # type: ignore[misc]
                    f'but {len(self.value)} choices are given.')
            for val in self.value:
                self._check_for_value_in_choices(val)
        else:
            self._check_for_value_in_choices(self.value)
        return self


class BooleanSetting(Setting):
    value: Optional[bool]


class BaseSettings(metaclass=AutoSettingNameMeta):
    """Base class for settings that can be loaded from a config file."""

    def __init__(self):
        self.manager = SettingsManager(bound_settings=self)

    def update_from_config(self, config):
        """Updates the settings from the section with the class name of a
        config."""
        n_loaded_settings = 0
        for cat, settings in config.items():
            # don't load settings of other categories
            if cat.lower() != self.__class__.__name__.lower():
                continue
            cat_from_cfg = config[cat]
            for setting in settings:
                if not hasattr(self, setting):
                    raise AttributeError(
                        f'{setting} is no allowed setting for '
                        f'{self.__class__.__name__}')
                set_from_cfg = cat_from_cfg.get(setting)
                if set_from_cfg is None:
                    continue
                elif not isinstance(set_from_cfg, str):
                    raise TypeError(
                        f'Config entry for {setting} is no string. '
                        f'Please use strings only in config.')
                setattr(self, setting, self._convert_config_value(
                    set_from_cfg))
                n_loaded_settings += 1
        logger.info(f'Loaded {n_loaded_settings} settings from config file.')

    @staticmethod
    def _convert_config_value(set_from_cfg: str):
        """Converts a config string to a python object."""
        try:
            val = ast.literal_eval(set_from_cfg)
        except (ValueError, SyntaxError):
            val = set_from_cfg
        if isinstance(val, str) and '.' in val:
            # handle Enums (will not be found by literal_eval)
            enum_type, enum_val = val.split('.', 1)
            try:
                return getattr(getattr(types, enum_type), enum_val)
            except AttributeError:
                raise AttributeError(
                    f"Tried to create the enumeration {enum_type} but it "
                    f"doesn't exist.")
        return val

    def load_config(self, config_path: Union[str, Path]):
        """Reads a config file and updates the settings from it."""
        config_path = Path(config_path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Config file {config_path} not found")
        config = configparser.ConfigParser(allow_no_value=True)
        config.read(config_path)
        self.update_from_config(config)


class ParserSettings(BaseSettings):
    """Settings for parsing property and quantity set definition pages."""

    item_kind = ChoiceSetting(
        value=ItemKind.property_set,
        choices={
            ItemKind.property_set: 'Pages define property sets (Pset_) with'
                                   ' four columns per property',
            ItemKind.quantity_set: 'Pages define quantity sets (Qto_) with'
                                   ' three columns per quantity',
        },
        description='Kind of definition pages to parse.'
    )

    item_kind_from_name = BooleanSetting(
        value=True,
        description='Parse pages whose set name starts with Qto_ as quantity'
                    ' set, independent of item_kind.'
    )

    enum_file_extension = ChoiceSetting(
        value='htm',
        choices={
            'htm': 'Enumeration pages are stored as .htm files',
            'html': 'Enumeration pages are stored as .html files',
        },
        description='File extension of the PEnum_ enumeration pages, '
                    'without leading dot.',
        any_string=True
    )

    strict_cell_count = BooleanSetting(
        value=True,
        description='Reject property rows with more cells than expected. If'
                    ' disabled only rows with too few cells are rejected.'
    )

    skip_failed_documents = BooleanSetting(
        value=False,
        description='Log and skip pages that can not be parsed instead of '
                    'stopping the whole run.'
    )
