from django.conf import settings


def get_default_context():
    """
    Default context for pipelines built without one.

    Projects using Django can set project-wide values (base_url, asset_root,
    ...) in the HTML_PIPELINE_CONTEXT setting. Outside a configured Django
    project the default context is empty.
    """
    if not settings.configured:
        return {}
    return dict(getattr(settings, "HTML_PIPELINE_CONTEXT", None) or {})
