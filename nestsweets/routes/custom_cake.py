"""Multi-step custom cake request."""

import logging
from datetime import date
from flask import Blueprint, render_template, redirect, url_for, flash, request, session, current_app
from flask_login import current_user
from nestsweets.extensions import db
from nestsweets.models import CustomRequest
from nestsweets.models.settings import load_site_settings
from nestsweets.forms.custom_cake import ContactStepForm, CakeStepForm, DesignStepForm, DeliveryStepForm
from nestsweets.utils.notifications import notify_admins_custom_request
from nestsweets.utils.uploads import save_upload
from nestsweets.utils.whatsapp import whatsapp_url, custom_request_message
from nestsweets.utils.wizard import CakeWizard

custom_cake_bp = Blueprint('custom_cake', __name__)

logger = logging.getLogger(__name__)

STEP_FORMS = {
    'contact': ContactStepForm,
    'cake': CakeStepForm,
    'design': DesignStepForm,
    'delivery': DeliveryStepForm,
}

LAST_REQUEST_KEY = 'last_custom_request'


def _step_values(form):
    return {name: field.data for name, field in form._fields.items()
            if name not in ('csrf_token', 'reference_images')}


def _build_request(wizard):
    data = wizard.data
    return CustomRequest(
        request_ref=CustomRequest.generate_request_ref(),
        user_id=current_user.id if current_user.is_authenticated else None,
        name=data['name'],
        phone=data['phone'],
        email=data.get('email') or None,
        occasion=data['occasion'],
        flavor=data['flavor'],
        size=data['size'],
        servings=data.get('servings') or None,
        tier=data.get('tier') or None,
        eggless=bool(data.get('eggless')),
        design=data['design'],
        reference_images=data.get('reference_images') or [],
        message=data.get('message') or None,
        delivery_date=date.fromisoformat(data['delivery_date']),
        delivery_address=data.get('delivery_address') or None,
        budget=data['budget'],
        urgency=data.get('urgency') or 'normal',
        status='pending'
    )


@custom_cake_bp.route('/', methods=['GET', 'POST'])
def wizard():
    """One page, four steps. Only the current step is validated."""
    wizard = CakeWizard.load()

    if request.method == 'POST' and request.form.get('action') == 'back':
        wizard.back()
        return redirect(url_for('custom_cake.wizard'))

    if request.method == 'GET' and wizard.step == 1 and not wizard.data and current_user.is_authenticated:
        wizard.data.update(name=current_user.name, email=current_user.email,
                           phone=current_user.phone or '')

    form_class = STEP_FORMS[wizard.name]
    if request.method == 'POST':
        form = form_class()
    else:
        form = form_class(data=wizard.form_data())

    if form.validate_on_submit():
        wizard.store(_step_values(form))

        if wizard.name == 'design':
            images = list(wizard.data.get('reference_images') or [])
            limit = current_app.config['MAX_REFERENCE_IMAGES']
            for file in request.files.getlist(form.reference_images.name):
                if len(images) >= limit:
                    break
                url = save_upload(file, 'custom_requests')
                if url:
                    images.append(url)
            wizard.data['reference_images'] = images

        if not wizard.is_last:
            wizard.next()
            return redirect(url_for('custom_cake.wizard'))

        custom_request = _build_request(wizard)
        db.session.add(custom_request)
        db.session.commit()
        logger.info('Custom request %s submitted', custom_request.request_ref)

        notify_admins_custom_request(custom_request)
        CakeWizard.reset()
        session[LAST_REQUEST_KEY] = custom_request.request_ref
        flash('Your custom cake request has been submitted! We will contact you shortly.', 'success')
        return redirect(url_for('custom_cake.submitted', request_ref=custom_request.request_ref))

    return render_template('custom_cake/wizard.html',
                         form=form,
                         wizard=wizard)


@custom_cake_bp.route('/reset', methods=['POST'])
def reset():
    CakeWizard.reset()
    return redirect(url_for('custom_cake.wizard'))


@custom_cake_bp.route('/submitted/<request_ref>')
def submitted(request_ref):
    custom_request = CustomRequest.query.filter_by(request_ref=request_ref).first_or_404()
    owns = current_user.is_authenticated and custom_request.user_id == current_user.id
    if not owns and session.get(LAST_REQUEST_KEY) != request_ref:
        flash('Request not found.', 'warning')
        return redirect(url_for('custom_cake.wizard'))

    settings = load_site_settings()
    store_whatsapp = settings.get('whatsapp') or current_app.config.get('ADMIN_WHATSAPP')
    wa_url = whatsapp_url(store_whatsapp, custom_request_message(custom_request)) if store_whatsapp else None
    return render_template('custom_cake/submitted.html',
                         custom_request=custom_request,
                         whatsapp_url=wa_url)
