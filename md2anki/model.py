import copy
import logging
from functools import cached_property
from typing import List, Dict, Any, Optional, Union

import chevron
import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


# Rendered into every field while probing a template for the fields it needs
SENTINEL = 'SeNtInEl'


def _load_specs(specs: Union[List[dict], str, None], kind: str) -> tuple:
    """Accept a list of dicts or a YAML list of mappings; always return copies."""
    if specs is None:
        return ()
    if isinstance(specs, str):
        specs = yaml.safe_load(specs) or []
    if not isinstance(specs, (list, tuple)):
        raise ConfigurationError(f'Model {kind} must be a list, not {type(specs).__name__}')
    for spec in specs:
        if not isinstance(spec, dict) or 'name' not in spec:
            raise ConfigurationError(f'Every model {kind[:-1]} needs a "name": {spec!r}')
    return tuple(copy.deepcopy(dict(spec)) for spec in specs)


class Model:
    """
    An Anki note type: the fields a note carries and the templates that turn
    those fields into cards.

    Fields and templates are copied on construction and never change
    afterwards, so `req` is computed once per model.
    """

    FRONT_BACK = 0
    CLOZE = 1

    DEFAULT_LATEX_PRE = (
        '\\documentclass[12pt]{article}\n\\special{papersize=3in,5in}\n\\usepackage[utf8]{inputenc}\n'
        '\\usepackage{amssymb,amsmath}\n\\pagestyle{empty}\n\\setlength{\\parindent}{0in}\n'
        '\\begin{document}\n')
    DEFAULT_LATEX_POST = '\\end{document}'

    def __init__(self, model_id: int, name: Optional[str] = None, fields=None, templates=None,
                 css: str = '', model_type: int = FRONT_BACK,
                 latex_pre: str = DEFAULT_LATEX_PRE, latex_post: str = DEFAULT_LATEX_POST,
                 sort_field_index: int = 0):
        self.model_id = model_id
        self.name = name
        self._fields = _load_specs(fields, 'fields')
        self._templates = _load_specs(templates, 'templates')
        self.css = css
        self.model_type = model_type
        self.latex_pre = latex_pre
        self.latex_post = latex_post
        self.sort_field_index = sort_field_index

    @property
    def fields(self) -> tuple:
        return self._fields

    @property
    def templates(self) -> tuple:
        return self._templates

    @property
    def field_names(self) -> List[str]:
        return [field['name'] for field in self._fields]

    @cached_property
    def req(self) -> List[list]:
        """
        Which fields each template needs before Anki will generate its card.

        Returns one entry per template, `[template_ord, 'all' | 'any', [field_ords]]`:
        - 'all': blanking any one of the listed fields blanks the front side.
        - 'any': filling any one of the listed fields on its own is enough.
        """
        field_names = self.field_names
        req = []
        for template_ord, template in enumerate(self._templates):
            qfmt = template['qfmt']

            required_fields = []
            for field_ord, field_name in enumerate(field_names):
                field_values = {name: SENTINEL for name in field_names}
                field_values[field_name] = ''
                rendered = chevron.render(qfmt, field_values)
                if SENTINEL not in rendered:
                    required_fields.append(field_ord)

            if required_fields:
                req.append([template_ord, 'all', required_fields])
                continue

            for field_ord, field_name in enumerate(field_names):
                field_values = {name: '' for name in field_names}
                field_values[field_name] = SENTINEL
                rendered = chevron.render(qfmt, field_values)
                if SENTINEL in rendered:
                    required_fields.append(field_ord)

            if not required_fields:
                raise ConfigurationError(
                    'Could not compute required fields for this template; '
                    f'please check the formatting of "qfmt": {qfmt!r}')

            req.append([template_ord, 'any', required_fields])

        logger.debug(f'Model {self.model_id} requirements: {req}')
        return req

    def to_json(self, timestamp: float, deck_id: int) -> Dict[str, Any]:
        """Descriptor stored under this model's id in the `col.models` blob."""
        templates = []
        for ord_, template in enumerate(self._templates):
            tmpl = dict(template)
            tmpl['ord'] = ord_
            tmpl['bafmt'] = tmpl.get('bafmt') or ''
            tmpl['bqfmt'] = tmpl.get('bqfmt') or ''
            tmpl['bfont'] = tmpl.get('bfont') or ''
            tmpl['bsize'] = tmpl.get('bsize') or 0
            tmpl.setdefault('did', None)
            templates.append(tmpl)

        fields = []
        for ord_, field in enumerate(self._fields):
            fld = dict(field)
            fld['ord'] = ord_
            fld['font'] = fld.get('font') or 'Liberation Sans'
            fld['media'] = fld.get('media') or []
            fld['rtl'] = fld.get('rtl') or False
            fld['size'] = fld.get('size') or 20
            fld['sticky'] = fld.get('sticky') or False
            fields.append(fld)

        return {
            'css': self.css,
            'did': deck_id,
            'flds': fields,
            'id': str(self.model_id),
            'latexPost': self.latex_post,
            'latexPre': self.latex_pre,
            'latexsvg': False,
            'mod': int(timestamp),
            'name': self.name,
            'req': self.req,
            'sortf': self.sort_field_index,
            'tags': [],
            'tmpls': templates,
            'type': self.model_type,
            'usn': -1,
            'vers': [],
        }

    def __repr__(self):
        return f'Model(model_id={self.model_id!r}, name={self.name!r}, fields={self.field_names!r})'
