"""Request body checks shared by the blueprints.

Services assume well-typed input; everything here runs first and reports
all failing fields at once as a 422.
"""
from arcade_backend.services import INT_MAX, ValidationError


def _is_int(value):
    # JSON booleans decode to bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


class Fields:
    def __init__(self, data):
        self.data = data if isinstance(data, dict) else {}
        self.errors = {}
        if not isinstance(data, dict):
            self.errors['body'] = ['Request body must be a JSON object']

    def has(self, key):
        return key in self.data

    def _fail(self, key, message):
        self.errors.setdefault(key, []).append(message)

    def _missing(self, key, required):
        if self.data.get(key) is None:
            if required:
                self._fail(key, f'The {key} field is required.')
            return True
        return False

    def integer(self, key, minimum=-INT_MAX, maximum=INT_MAX, required=True):
        if self._missing(key, required):
            return None
        value = self.data[key]
        if not _is_int(value):
            self._fail(key, f'The {key} field must be an integer.')
            return None
        if minimum is not None and value < minimum:
            self._fail(key, f'The {key} field must be at least {minimum}.')
        if maximum is not None and value > maximum:
            self._fail(key, f'The {key} field must not be greater than {maximum}.')
        return value

    def integer_list(self, key, minimum=1, required=True):
        if self._missing(key, required):
            return None
        value = self.data[key]
        if not isinstance(value, list):
            self._fail(key, f'The {key} field must be an array.')
            return None
        for item in value:
            if not _is_int(item) or not minimum <= item <= INT_MAX:
                self._fail(key, f'Each {key} item must be an integer between {minimum} and {INT_MAX}.')
                return None
        return value

    def choice(self, key, choices, required=True):
        if self._missing(key, required):
            return None
        value = self.data[key]
        if not isinstance(value, str) or value.lower() not in choices:
            self._fail(key, f"The {key} field must be one of: {', '.join(choices)}.")
            return None
        return value.lower()

    def string(self, key, min_length=1, max_length=255, required=True):
        if self._missing(key, required):
            return None
        value = self.data[key]
        if not isinstance(value, str):
            self._fail(key, f'The {key} field must be a string.')
            return None
        value = value.strip()
        if not min_length <= len(value) <= max_length:
            self._fail(key, f'The {key} field must be between {min_length} and {max_length} characters.')
        return value

    def mapping(self, key, required=False):
        if self._missing(key, required):
            return None
        value = self.data[key]
        if not isinstance(value, dict):
            self._fail(key, f'The {key} field must be an object.')
            return None
        return value

    def check(self):
        if self.errors:
            raise ValidationError(errors=self.errors)
