from dataclasses import dataclass

from .config.settings import ContactConfig, load_config
from .llm.refinement_client import RefinementRequester
from .services.form_submitter import FormSubmitter


@dataclass
class ContactServices:
    config: ContactConfig
    refinement: RefinementRequester
    forms: FormSubmitter


def create_services(config_name: str = "production") -> ContactServices:
    config = load_config(config_name)
    return ContactServices(
        config=config,
        refinement=RefinementRequester(config),
        forms=FormSubmitter(config),
    )


__all__ = ["ContactConfig", "ContactServices", "FormSubmitter", "RefinementRequester", "create_services", "load_config"]
