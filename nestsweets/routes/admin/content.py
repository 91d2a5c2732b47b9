"""Announcements, site settings and page content."""

import logging
from flask import render_template, redirect, url_for, flash, request
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from nestsweets.extensions import db
from nestsweets.models import Announcement, ContentBlock
from nestsweets.models.content import LIST_SECTIONS, POLICY_TYPES
from nestsweets.models.settings import (load_site_settings, save_site_settings,
                                        load_record, save_record)
from nestsweets.forms.admin import AnnouncementForm, SettingsForm, parse_list
from nestsweets.utils.decorators import admin_required
from nestsweets.utils.notifications import send_broadcast_notification
from . import admin_bp

logger = logging.getLogger(__name__)

# Editable fields per list section; submitted as <section>-<index>-<field>
SECTION_FIELDS = {
    'hero_slides': ['title', 'subtitle', 'description', 'image', 'cta_text', 'cta_link'],
    'features': ['icon', 'title', 'description'],
    'why_choose': ['icon', 'title', 'description'],
    'services': ['icon', 'title', 'description', 'features', 'image', 'color'],
}

SINGLETON_FIELDS = {
    'stats': ['orders', 'customers', 'cakes', 'rating'],
    'footer': ['company_name', 'tagline', 'phone', 'email', 'address'],
    'about_page': ['hero_title', 'hero_subtitle', 'hero_image', 'story_title',
                   'mission_title', 'mission_text', 'vision_title', 'vision_text'],
    'services_page': ['hero_title', 'hero_subtitle', 'hero_image', 'intro_title', 'intro_subtitle',
                      'cta_primary_label', 'cta_primary_link',
                      'cta_secondary_label', 'cta_secondary_link'],
}


def parse_section(form, section):
    """Rows of a list section in submitted order; fully blank rows are dropped."""
    fields = SECTION_FIELDS[section]
    indexes = set()
    prefix = f'{section}-'
    for key in form.keys():
        if key.startswith(prefix):
            index = key[len(prefix):].split('-', 1)[0]
            if index.isdigit():
                indexes.add(int(index))

    items = []
    for index in sorted(indexes):
        item = {field: form.get(f'{section}-{index}-{field}', '').strip() for field in fields}
        if not any(item.values()):
            continue
        if 'features' in item:
            item['features'] = parse_list(item['features'])
        item['is_active'] = form.get(f'{section}-{index}-is_active') is not None
        items.append(item)
    return items


def parse_singleton(form, key):
    values = {}
    for field in SINGLETON_FIELDS[key]:
        raw = form.get(f'{key}-{field}')
        if raw is None:
            continue
        raw = raw.strip()
        if key == 'stats':
            try:
                values[field] = float(raw) if field == 'rating' else int(raw or 0)
            except ValueError:
                values[field] = 0
        else:
            values[field] = raw
    if key == 'about_page':
        paragraphs = form.getlist('about_page-story_paragraphs')
        if paragraphs:
            values['story_paragraphs'] = [p.strip() for p in paragraphs if p.strip()]
    return values


# --- Announcements ---
@admin_bp.route('/announcements', methods=['GET', 'POST'])
@login_required
@admin_required
def announcements():
    form = AnnouncementForm()
    if form.validate_on_submit():
        announcement = Announcement(
            title=form.title.data,
            message=form.message.data,
            type=form.type.data,
            link=form.link.data or None,
            is_active=form.is_active.data,
            show_on_header=form.show_on_header.data,
            created_by=current_user.id
        )
        db.session.add(announcement)
        db.session.commit()

        if form.broadcast.data:
            sent = send_broadcast_notification(
                f'📢 {announcement.title}',
                announcement.message,
                type='promo' if announcement.type == 'promo' else 'system',
                link=announcement.link
            )
            flash(f'Announcement published and sent to {sent} users.', 'success')
        else:
            flash('Announcement published.', 'success')
        return redirect(url_for('admin.announcements'))

    items = Announcement.query.order_by(Announcement.created_at.desc()).all()
    return render_template('admin/announcements.html', announcements=items, form=form)


@admin_bp.route('/announcements/<int:announcement_id>/<any(is_active, show_on_header):flag>',
                methods=['POST'])
@login_required
@admin_required
def toggle_announcement(announcement_id, flag):
    announcement = Announcement.query.get_or_404(announcement_id)
    setattr(announcement, flag, not getattr(announcement, flag))
    db.session.commit()
    flash('Announcement updated.', 'success')
    return redirect(url_for('admin.announcements'))


@admin_bp.route('/announcements/<int:announcement_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_announcement(announcement_id):
    db.session.delete(Announcement.query.get_or_404(announcement_id))
    db.session.commit()
    flash('Announcement deleted.', 'success')
    return redirect(url_for('admin.announcements'))


# --- Settings ---
@admin_bp.route('/settings', methods=['GET', 'POST'])
@login_required
@admin_required
def settings():
    form = SettingsForm()
    if request.method == 'GET':
        form.load(load_site_settings())

    if form.validate_on_submit():
        save_site_settings(form.values())
        logger.info('Site settings updated by user %s', current_user.id)
        flash('Settings saved.', 'success')
        return redirect(url_for('admin.settings'))

    return render_template('admin/settings.html', form=form)


# --- Content ---
@admin_bp.route('/content', methods=['GET', 'POST'])
@login_required
@admin_required
def content():
    """Edit every content section. Saving replaces list sections wholesale."""
    if request.method == 'POST':
        try:
            for section in LIST_SECTIONS:
                if f'{section}-present' in request.form:
                    ContentBlock.replace_section(section, parse_section(request.form, section))
            for key in SINGLETON_FIELDS:
                values = parse_singleton(request.form, key)
                if values:
                    save_record(key, values, commit=False)
            for policy_type, title in POLICY_TYPES.items():
                content_value = request.form.get(f'policy-{policy_type}-content')
                if content_value is not None:
                    ContentBlock.upsert_policy(
                        policy_type,
                        request.form.get(f'policy-{policy_type}-title') or title,
                        content_value
                    )
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception('Failed to save content')
            flash('Failed to save content. Nothing was changed.', 'danger')
        else:
            flash('Content saved.', 'success')
        return redirect(url_for('admin.content', tab=request.form.get('tab', 'hero_slides')))

    sections = {section: ContentBlock.section_items(section) for section in LIST_SECTIONS}
    policies = {}
    for policy_type, title in POLICY_TYPES.items():
        block = ContentBlock.get_policy(policy_type)
        policies[policy_type] = block.data if block else {'title': title, 'content': ''}

    return render_template('admin/content.html',
                         sections=sections,
                         section_fields=SECTION_FIELDS,
                         singletons={key: load_record(key) for key in SINGLETON_FIELDS},
                         singleton_fields=SINGLETON_FIELDS,
                         policies=policies,
                         current_tab=request.args.get('tab', 'hero_slides'))
