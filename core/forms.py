import os

from django import forms                # type:ignore
from django.utils import timezone       # type:ignore

ALLOWED_EXTENSIONS = ('.xls', '.xlsx')


class UploadRoundForm(forms.Form):
    round_number = forms.IntegerField(
        label='Round number',
        min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control'}),
    )
    round_date = forms.DateField(
        label='Round date',
        initial=timezone.localdate,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )
    comment = forms.CharField(
        label='Comment',
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
    )
    file = forms.FileField(
        label='CESIM results workbook (.xls, .xlsx)',
        widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': '.xls,.xlsx'}),
    )

    def clean_file(self):
        upload = self.cleaned_data['file']
        ext = os.path.splitext(upload.name)[1].lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise forms.ValidationError('Please upload an Excel workbook (.xls or .xlsx).')
        return upload
