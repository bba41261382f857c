from django.contrib import admin

from .models import (
    Member, Departement, DeathCase, Project, Transaction, MessageThread, InternalMessage, Event, SpiritualPathway,
    TrainingCourse, TrainingSession, ChurchDocument, Announcement,
)


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ('last_name', 'first_name', 'church', 'phone', 'status', 'department')
    list_filter = ('status', 'gender', 'church')
    search_fields = ('first_name', 'last_name', 'phone', 'email')


@admin.register(Departement)
class DepartementAdmin(admin.ModelAdmin):
    list_display = ('name', 'church', 'leader')
    filter_horizontal = ('members',)


@admin.register(DeathCase)
class DeathCaseAdmin(admin.ModelAdmin):
    list_display = ('deceased_name', 'church', 'declaration_date', 'status')
    list_filter = ('status',)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ('name', 'church', 'status', 'budget', 'spent')
    list_filter = ('status',)


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ('date', 'church', 'type', 'category', 'amount', 'member')
    list_filter = ('type', 'category')
    date_hierarchy = 'date'


class InternalMessageInline(admin.TabularInline):
    model = InternalMessage
    extra = 0


@admin.register(MessageThread)
class MessageThreadAdmin(admin.ModelAdmin):
    list_display = ('subject', 'church', 'created_at')
    inlines = [InternalMessageInline]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('name', 'church', 'type', 'start_date', 'start_time', 'status')
    list_filter = ('status', 'type', 'recurrence')
    date_hierarchy = 'start_date'
    filter_horizontal = ('attendees',)


@admin.register(SpiritualPathway)
class SpiritualPathwayAdmin(admin.ModelAdmin):
    list_display = ('name', 'church')


class TrainingSessionInline(admin.TabularInline):
    model = TrainingSession
    extra = 0
    filter_horizontal = ('present_members',)


@admin.register(TrainingCourse)
class TrainingCourseAdmin(admin.ModelAdmin):
    list_display = ('name', 'church', 'pathway', 'leader', 'status', 'is_paid')
    list_filter = ('status', 'is_paid')
    filter_horizontal = ('enrolled_members',)
    inlines = [TrainingSessionInline]


@admin.register(ChurchDocument)
class ChurchDocumentAdmin(admin.ModelAdmin):
    list_display = ('name', 'church', 'category', 'upload_date', 'uploaded_by')
    list_filter = ('category',)
    search_fields = ('name',)


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ('title', 'church', 'author', 'created_at')
