from django import forms

from .engine import TIME_LABEL_RE


class SlotQueryForm(forms.Form):
    """GET parameters of the slot grid endpoint. A missing date means no day picked yet."""
    barbershop_id = forms.UUIDField()
    date = forms.DateField(required=False, input_formats=['%Y-%m-%d'])


class BookingSubmissionForm(forms.Form):
    """
    Parses the booking POST. Date and hour are optional here on purpose:
    a missing selection is reported by the engine as IncompleteSelectionError.
    """
    barbershop_id = forms.UUIDField()
    service_id = forms.UUIDField()
    date = forms.DateField(required=False, input_formats=['%Y-%m-%d'])
    hour = forms.CharField(required=False, max_length=5)

    def clean_hour(self):
        hour = self.cleaned_data.get('hour', '').strip()
        if hour and not TIME_LABEL_RE.fullmatch(hour):
            raise forms.ValidationError("Use the HH:MM format, e.g. 09:30.")
        return hour
