import logging
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    input_path: str = 'petstore-swagger.json'
    output_dir: str = '.'
    api_key: Optional[str] = None
    publish_enabled: bool = False
    postman_base_url: str = 'https://api.getpostman.com'
    collection_name: str = 'Generated Collection'
    collection_description: str = 'Collection generated from Swagger file'
    fake_data_seed: Optional[int] = None
    fake_int_min: int = 0
    fake_int_max: int = 2 ** 53 - 1

    model_config = SettingsConfigDict(
        env_file='.env',
        env_prefix='swaggerman_',
        extra='ignore',
    )

    @model_validator(mode='after')
    def check_publish(self):
        if self.publish_enabled and not self.api_key:
            raise ValueError("api_key is required when publish_enabled is set")
        if self.fake_int_min > self.fake_int_max:
            raise ValueError("fake_int_min must not exceed fake_int_max")
        return self


from . import cli  # noqa: E402, F401
